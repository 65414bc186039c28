"""Infrastructure Layer — storage backends and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Backends raise OSError subclasses; mapping to DocStoreError happens in services/
"""
