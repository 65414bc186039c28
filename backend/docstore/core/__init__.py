"""Core Layer — pure path and document logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Storage is reached only through the protocols in storage_protocols.py
"""
