"""Domain Types — rich types that replace bare strings across the codebase.

Invariants:
    - SanitizedPath only ever comes out of sanitize_path()
    - DOCUMENT_EXTENSION is the single source of truth for the accepted suffix
    - Result types are frozen: the shell reads them, never mutates them

Design Decisions:
    - NewType over a wrapper class: zero runtime cost, type-checker still
      distinguishes raw client input from sanitized paths
"""

from dataclasses import dataclass
from typing import Any, NewType


SanitizedPath = NewType("SanitizedPath", str)

DOCUMENT_EXTENSION = ".json"
NO_STORE = "no-store"


@dataclass(frozen=True)
class ReadResult:
    """Outcome of a document read. found=False is an answer, not a failure."""
    path: SanitizedPath
    found: bool
    data: Any = None
    content: bytes | None = None
    cache_control: str = NO_STORE


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a successful document write."""
    path: SanitizedPath
    bytes: int


@dataclass(frozen=True)
class DirectoryEntry:
    """One top-level entry of the storage root."""
    name: str
    dir: bool
    file: bool
