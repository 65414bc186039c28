"""Response Schemas — Pydantic models for the JSON bodies the API returns.

Invariants:
    - Field names match what existing clients read (ok, path, bytes, ts, data_root)
    - Document bodies themselves are never modeled: they are opaque JSON
"""

from datetime import datetime

from pydantic import BaseModel, Field


class WriteResponse(BaseModel):
    """Acknowledgement for a successful PUT."""
    ok: bool = True
    path: str
    bytes: int = Field(ge=0)


class HealthResponse(BaseModel):
    """Liveness payload."""
    ok: bool = True
    ts: datetime
    data_root: str


class ListingItem(BaseModel):
    name: str
    dir: bool
    file: bool


class ListingResponse(BaseModel):
    """Top-level view of the storage root."""
    root: str
    items: list[ListingItem]
