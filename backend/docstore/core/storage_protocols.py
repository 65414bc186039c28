"""Boundary Protocols — contract between the document store and its storage backend.

Invariants:
    - Paths handed to a backend are sanitized, "/"-separated and relative
    - Missing files are reported by exists() returning False, never by raising
    - Every other failure surfaces as OSError (or a subclass)

Design Decisions:
    - Protocol over ABC: structural subtyping, backends share no base class
    - Async methods: implementations do IO, the store awaits them per request
"""

from typing import Protocol

from docstore.core.domain_types import DirectoryEntry, SanitizedPath


class StorageBackend(Protocol):
    """Capability set the document store needs from durable storage."""

    root: str

    async def exists(self, path: SanitizedPath) -> bool: ...

    async def read_text(self, path: SanitizedPath) -> str: ...

    async def write_bytes(self, path: SanitizedPath, data: bytes) -> None: ...

    async def ensure_directory(self, directory: str) -> None: ...

    async def list_directory(self, directory: str = "") -> list[DirectoryEntry]: ...

    async def is_available(self) -> bool: ...
