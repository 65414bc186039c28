"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - health is registered before documents: the document catch-all would
      otherwise shadow /_health and /_list
"""
