"""Health, Readiness & Listing — operational endpoints outside the document namespace.

Invariants:
    - GET /_health always returns 200 if the process is up (liveness)
    - GET /_health/ready returns 503 if the storage root is not a writable directory
    - GET /_list shows the top level of the storage root only, never recursive
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from docstore.api.dependencies import get_document_store
from docstore.core.domain_types import NO_STORE
from docstore.schemas.document import HealthResponse, ListingItem, ListingResponse
from docstore.services.document_store import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/_health", response_model=HealthResponse)
async def health_check(store: DocumentStore = Depends(get_document_store)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return HealthResponse(ts=datetime.now(timezone.utc), data_root=store.root)


@router.get("/_health/ready")
async def readiness_check(store: DocumentStore = Depends(get_document_store)):
    """Readiness probe: the storage root must be usable."""
    if not await store.is_ready():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "storage_unavailable"},
        )
    return {"status": "ready", "checks": {"storage": "healthy"}}


@router.get("/_list", response_model=ListingResponse)
async def list_root(store: DocumentStore = Depends(get_document_store)):
    """Top-level listing of the storage root, for debugging."""
    entries = await store.list_root()
    listing = ListingResponse(
        root=store.root,
        items=[ListingItem(name=e.name, dir=e.dir, file=e.file) for e in entries],
    )
    return JSONResponse(
        content=listing.model_dump(), headers={"Cache-Control": NO_STORE},
    )
