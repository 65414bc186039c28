"""Document Store — reads and writes whole JSON documents through a StorageBackend.

Invariants:
    - Paths are SanitizedPath: the store trusts its caller and does not re-sanitize
    - A missing document is ReadResult(found=False), not an exception
    - Every write replaces the full document; there is no merge
    - Documents are encoded to UTF-8 before any directory is created: a value
      that cannot be encoded fails without touching storage
    - Backend failures surface as DocumentReadError / DocumentWriteError with the
      cause logged, never returned to clients

Design Decisions:
    - Per-path asyncio.Lock (serialize_writes) keeps concurrent PUTs to one
      document from interleaving; locks live in a WeakValueDictionary so idle
      paths hold no memory
    - No in-memory cache: each call goes to storage
"""

import asyncio
import logging
import weakref
from typing import Any

from docstore.config import Settings
from docstore.core.domain_types import (
    DirectoryEntry, ReadResult, SanitizedPath, WriteResult,
)
from docstore.core.errors import DocumentReadError, DocumentWriteError
from docstore.core.render_json import encode_document, parse_document
from docstore.core.sanitize_path import parent_directory
from docstore.core.storage_protocols import StorageBackend
from docstore.infrastructure.filesystem_backend import FilesystemBackend

logger = logging.getLogger(__name__)


class DocumentStore:
    """Path-addressed JSON documents on top of a storage backend."""

    def __init__(self, backend: StorageBackend, serialize_writes: bool = True):
        self.backend = backend
        self.serialize_writes = serialize_writes
        self._write_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def root(self) -> str:
        return self.backend.root

    async def read(self, path: SanitizedPath, pretty: bool = True) -> ReadResult:
        """Load and render one document."""
        try:
            if not await self.backend.exists(path):
                return ReadResult(path=path, found=False)
            text = await self.backend.read_text(path)
            data = parse_document(text)
            content = encode_document(data, pretty)
        except (OSError, ValueError, RecursionError) as e:
            logger.error(
                f"Read failed for {path}: {e}", extra={"document_path": path},
            )
            raise DocumentReadError(path, str(e)) from e

        return ReadResult(path=path, found=True, data=data, content=content)

    async def write(
        self, path: SanitizedPath, document: Any, pretty: bool = True,
    ) -> WriteResult:
        """Serialize a document and replace whatever is stored at path."""
        try:
            data = encode_document(document, pretty)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(
                f"Cannot serialize {path}: {e}", extra={"document_path": path},
            )
            raise DocumentWriteError(path, str(e)) from e

        if self.serialize_writes:
            async with self._lock_for(path):
                await self._persist(path, data)
        else:
            await self._persist(path, data)

        size = len(data)
        logger.info(
            f"Wrote {path} ({size} bytes)",
            extra={"document_path": path, "bytes": size},
        )
        return WriteResult(path=path, bytes=size)

    async def list_root(self) -> list[DirectoryEntry]:
        """Top-level entries of the storage root."""
        try:
            return await self.backend.list_directory("")
        except OSError as e:
            logger.error(f"Listing storage root failed: {e}")
            raise DocumentReadError("", str(e)) from e

    async def is_ready(self) -> bool:
        return await self.backend.is_available()

    async def _persist(self, path: SanitizedPath, data: bytes) -> None:
        try:
            await self.backend.ensure_directory(parent_directory(path))
            await self.backend.write_bytes(path, data)
        except OSError as e:
            logger.error(
                f"Write failed for {path}: {e}", extra={"document_path": path},
            )
            raise DocumentWriteError(path, str(e)) from e

    def _lock_for(self, path: str) -> asyncio.Lock:
        lock = self._write_locks.get(path)
        if lock is None:
            lock = asyncio.Lock()
            self._write_locks[path] = lock
        return lock


def build_document_store(settings: Settings) -> DocumentStore:
    """Document store over the configured data root."""
    backend = FilesystemBackend(
        settings.data_root, atomic_writes=settings.atomic_writes,
    )
    return DocumentStore(backend, serialize_writes=settings.serialize_writes)
