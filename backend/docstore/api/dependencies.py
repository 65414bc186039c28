"""Request Dependencies — per-app settings, document store, and the write gate.

Invariants:
    - Settings and store are read from app.state, never from module globals
    - The storage key is compared in constant time
    - An empty storage key leaves writes open
"""

import secrets

from fastapi import Header, Request

from docstore.config import Settings
from docstore.core.errors import ForbiddenError
from docstore.services.document_store import DocumentStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.store


def require_storage_key(
    request: Request,
    x_storage_key: str | None = Header(None),
) -> None:
    """Reject writes whose X-Storage-Key does not match the configured secret."""
    expected = get_app_settings(request).storage_key
    if not expected:
        return
    if x_storage_key is None or not secrets.compare_digest(
        x_storage_key.encode("utf-8"), expected.encode("utf-8"),
    ):
        raise ForbiddenError()
