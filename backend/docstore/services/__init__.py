"""Services Layer — orchestrates core logic around storage IO.

Invariants:
    - Backend OSErrors are mapped to DocStoreError here, never in api/
"""
