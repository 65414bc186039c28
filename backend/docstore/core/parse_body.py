"""Request Body Parsing — turns a raw PUT payload into a JSON document or a typed error.

Invariants:
    - Runs before the document store is touched: a rejected body never creates a file
    - Size is checked before decoding
    - Whitespace-only payloads count as missing, JSON null counts as present
    - Nesting deeper than json can decode is an invalid body, not a crash
"""

from typing import Any

from docstore.core.errors import (
    InvalidBodyError, MissingBodyError, PayloadTooLargeError,
)
from docstore.core.render_json import parse_document


def parse_request_body(raw: bytes, limit: int, path: str | None = None) -> Any:
    """Decode and parse a request body, raising the matching DocStoreError."""
    if len(raw) > limit:
        raise PayloadTooLargeError(limit)
    if not raw.strip():
        raise MissingBodyError(path)
    try:
        return parse_document(raw.decode("utf-8"))
    except (ValueError, RecursionError) as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueError
        raise InvalidBodyError(path) from e
