"""JSON Rendering — parse stored text and render documents for storage or response.

Invariants:
    - Empty stored text parses to an empty object
    - NaN / Infinity are rejected both ways (not JSON)
    - Pretty output is 2-space indented; compact output has no whitespace
    - Non-ASCII characters are written verbatim (UTF-8 on disk)
    - Every failure is ValueError, TypeError or RecursionError: lone surrogates
      fail the UTF-8 encode (UnicodeEncodeError), nesting past the interpreter
      recursion limit fails in json itself
"""

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_document(text: str) -> Any:
    """Parse stored or submitted JSON text.

    Raises ValueError on malformed input, RecursionError on excessive nesting.
    """
    if not text:
        return {}
    return json.loads(text, parse_constant=_reject_constant)


def render_document(document: Any, pretty: bool) -> str:
    """Serialize a JSON value. Raises ValueError/TypeError if it is not JSON-safe."""
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
    return json.dumps(
        document, separators=(",", ":"), ensure_ascii=False, allow_nan=False,
    )


def encode_document(document: Any, pretty: bool) -> bytes:
    """Render a JSON value to the UTF-8 bytes that get stored or sent."""
    return render_document(document, pretty).encode("utf-8")
