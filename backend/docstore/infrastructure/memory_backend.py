"""In-Memory Backend — StorageBackend kept in dicts, for tests and ephemeral runs.

Invariants:
    - Mirrors filesystem semantics the store relies on: writes need an existing
      parent directory, a file cannot be used as a directory and vice versa
    - The root directory ("") always exists
"""

import posixpath

from docstore.core.domain_types import DirectoryEntry, SanitizedPath


class MemoryBackend:
    """Documents held as text keyed by relative path."""

    def __init__(self, root: str = "memory://"):
        self.root = root
        self.files: dict[str, str] = {}
        self.directories: set[str] = {""}

    async def exists(self, path: SanitizedPath) -> bool:
        return path in self.files or path in self.directories

    async def read_text(self, path: SanitizedPath) -> str:
        if path in self.directories:
            raise IsADirectoryError(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    async def write_bytes(self, path: SanitizedPath, data: bytes) -> None:
        if path in self.directories:
            raise IsADirectoryError(path)
        if posixpath.dirname(path) not in self.directories:
            raise FileNotFoundError(f"no such directory: {posixpath.dirname(path)}")
        self.files[path] = data.decode("utf-8")

    async def ensure_directory(self, directory: str) -> None:
        prefix = ""
        for part in filter(None, directory.split("/")):
            prefix = posixpath.join(prefix, part)
            if prefix in self.files:
                raise NotADirectoryError(prefix)
            self.directories.add(prefix)

    async def list_directory(self, directory: str = "") -> list[DirectoryEntry]:
        if directory not in self.directories:
            raise FileNotFoundError(directory)
        entries = [
            DirectoryEntry(name=posixpath.basename(p), dir=False, file=True)
            for p in self.files if posixpath.dirname(p) == directory
        ]
        entries += [
            DirectoryEntry(name=posixpath.basename(d), dir=True, file=False)
            for d in self.directories if d and posixpath.dirname(d) == directory
        ]
        return sorted(entries, key=lambda e: e.name)

    async def is_available(self) -> bool:
        return True
