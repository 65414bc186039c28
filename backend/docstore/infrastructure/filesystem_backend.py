"""Filesystem Backend — StorageBackend over a local directory tree.

Invariants:
    - Every location is resolved (symlinks followed) and must stay under the root;
      anything else raises PermissionError
    - Blocking calls run in a worker thread, never on the event loop
    - Documents are written as the bytes given, no newline translation

Design Decisions:
    - Atomic writes (temp file in the target directory + os.replace) are on by
      default; readers then see either the old or the new document, never a
      partial one
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from docstore.core.domain_types import DirectoryEntry, SanitizedPath

logger = logging.getLogger(__name__)

_DOCUMENT_MODE = 0o644


class FilesystemBackend:
    """Stores each document as one file under a root directory."""

    def __init__(self, root: str | os.PathLike, atomic_writes: bool = True):
        self._root = Path(root).resolve()
        self.root = str(self._root)
        self.atomic_writes = atomic_writes

    def _locate(self, relative: str) -> Path:
        target = (self._root / relative).resolve()
        if not target.is_relative_to(self._root):
            raise PermissionError(f"location escapes storage root: {relative}")
        return target

    # ─── StorageBackend ──────────────────────────────────────────

    async def exists(self, path: SanitizedPath) -> bool:
        return await asyncio.to_thread(self._exists, path)

    async def read_text(self, path: SanitizedPath) -> str:
        return await asyncio.to_thread(self._read_text, path)

    async def write_bytes(self, path: SanitizedPath, data: bytes) -> None:
        await asyncio.to_thread(self._write_bytes, path, data)

    async def ensure_directory(self, directory: str) -> None:
        await asyncio.to_thread(self._ensure_directory, directory)

    async def list_directory(self, directory: str = "") -> list[DirectoryEntry]:
        return await asyncio.to_thread(self._list_directory, directory)

    async def is_available(self) -> bool:
        return await asyncio.to_thread(self._is_available)

    # ─── Blocking implementations ────────────────────────────────

    def _exists(self, path: str) -> bool:
        return self._locate(path).exists()

    def _read_text(self, path: str) -> str:
        return self._locate(path).read_bytes().decode("utf-8")

    def _write_bytes(self, path: str, data: bytes) -> None:
        target = self._locate(path)
        if not self.atomic_writes:
            target.write_bytes(data)
            return

        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.chmod(tmp_name, _DOCUMENT_MODE)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_directory(self, directory: str) -> None:
        # "" is the root itself, created on first write if absent
        self._locate(directory).mkdir(parents=True, exist_ok=True)

    def _list_directory(self, directory: str) -> list[DirectoryEntry]:
        base = self._locate(directory) if directory else self._root
        with os.scandir(base) as entries:
            items = [
                DirectoryEntry(
                    name=entry.name, dir=entry.is_dir(), file=entry.is_file(),
                )
                for entry in entries
            ]
        return sorted(items, key=lambda e: e.name)

    def _is_available(self) -> bool:
        ok = self._root.is_dir() and os.access(self._root, os.W_OK)
        if not ok:
            logger.warning(f"Storage root not usable: {self.root}")
        return ok
