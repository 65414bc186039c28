"""Documents — GET and PUT of JSON documents addressed by URL path.

Invariants:
    - Every request path goes through sanitize_path before storage is touched
    - PUT checks the storage key before looking at the path or body
    - ?pretty=0 selects compact JSON; any other value (or none) selects pretty
    - Successful responses and not-found answers carry Cache-Control: no-store

Design Decisions:
    - Body read as raw bytes, not a Pydantic model: documents are opaque JSON
      and "no body" must be told apart from a JSON null
    - Content-Length checked before reading; bodies without one (chunked) are
      read from the stream and refused as soon as they pass the limit, so at
      most one chunk over the limit is ever buffered
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from docstore.api.dependencies import (
    get_app_settings, get_document_store, require_storage_key,
)
from docstore.config import Settings
from docstore.core.domain_types import NO_STORE, SanitizedPath
from docstore.core.errors import (
    DocumentNotFoundError, InvalidPathError, PayloadTooLargeError,
)
from docstore.core.parse_body import parse_request_body
from docstore.core.sanitize_path import sanitize_path
from docstore.schemas.document import WriteResponse
from docstore.services.document_store import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["documents"])


def _sanitize_or_reject(document_path: str) -> SanitizedPath:
    raw = f"/{document_path}"
    cleaned = sanitize_path(raw)
    if cleaned is None:
        raise InvalidPathError(raw)
    return cleaned


def _is_pretty(pretty: str | None) -> bool:
    return pretty != "0"


def _check_declared_length(request: Request, limit: int) -> None:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)


async def _read_limited_body(request: Request, limit: int) -> bytes:
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError(limit)
        chunks.append(chunk)
    return b"".join(chunks)


@router.get("/{document_path:path}")
async def read_document(
    document_path: str,
    pretty: str | None = Query(None),
    store: DocumentStore = Depends(get_document_store),
):
    """Return the stored document, pretty-printed unless ?pretty=0."""
    path = _sanitize_or_reject(document_path)
    result = await store.read(path, pretty=_is_pretty(pretty))
    if not result.found:
        raise DocumentNotFoundError(path)
    return Response(
        content=result.content, media_type="application/json",
        headers={"Cache-Control": result.cache_control},
    )


@router.put(
    "/{document_path:path}", dependencies=[Depends(require_storage_key)],
)
async def write_document(
    document_path: str,
    request: Request,
    pretty: str | None = Query(None),
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
):
    """Replace the document at the path with the request body."""
    path = _sanitize_or_reject(document_path)
    _check_declared_length(request, settings.max_body_bytes)
    document = parse_request_body(
        await _read_limited_body(request, settings.max_body_bytes),
        settings.max_body_bytes, path,
    )
    result = await store.write(path, document, pretty=_is_pretty(pretty))
    return JSONResponse(
        content=WriteResponse(path=result.path, bytes=result.bytes).model_dump(),
        headers={"Cache-Control": NO_STORE},
    )
