"""Path Sanitizer — turns an untrusted client path into a root-confined relative path.

Invariants:
    - sanitize_path is PURE: no filesystem access, no logging, no exceptions
    - A returned path never contains a ".." segment and never starts with "/"
    - A returned path always ends with DOCUMENT_EXTENSION (case-insensitive)
    - Joining the storage root with a returned path cannot leave the root

Design Decisions:
    - Backslashes are folded into "/" before normalization so the same rules
      hold regardless of the host platform
    - Leading ".." runs are stripped (the path is re-anchored at the root)
      rather than rejected, matching how clients address documents with
      relative URLs
    - A bare ".json" segment (no basename) is rejected
"""

import posixpath
import re

from docstore.core.domain_types import DOCUMENT_EXTENSION, SanitizedPath


_LEADING_PARENTS = re.compile(r"^(\.\.(/|$))+")
_PARENT_SEGMENT = ".."


def sanitize_path(raw_path: str) -> SanitizedPath | None:
    """Return the sanitized relative path, or None when the input is rejected."""
    if "\x00" in raw_path:
        return None

    cleaned = posixpath.normpath(raw_path.replace("\\", "/"))
    cleaned = _LEADING_PARENTS.sub("", cleaned)

    segments = cleaned.split("/")
    if _PARENT_SEGMENT in segments:
        return None
    if not cleaned.lower().endswith(DOCUMENT_EXTENSION):
        return None
    if segments[-1].lower() == DOCUMENT_EXTENSION:
        return None

    return SanitizedPath(cleaned.lstrip("/"))


def parent_directory(path: SanitizedPath) -> str:
    """Directory part of a sanitized path ("" for documents at the root)."""
    return posixpath.dirname(path)
