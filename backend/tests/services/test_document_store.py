"""Document Store tests — read/write protocol over in-memory and filesystem backends.

Tests cover:
    - Write then read round-trips for pretty and compact rendering
    - Rendering is chosen per read, independent of how the document was stored
    - Writing the same document twice equals writing it once
    - Never-written paths are found=False, not errors
    - Empty stored files read as {}; malformed ones raise DocumentReadError
    - Backend failures map to DocumentReadError / DocumentWriteError
    - Documents that parse but cannot be encoded, or nest too deeply, map to
      the same errors and leave storage untouched on write
    - Concurrent writes to one path are serialized when enabled
"""

import asyncio

import pytest

from docstore.core.domain_types import DirectoryEntry, SanitizedPath
from docstore.core.errors import DocumentReadError, DocumentWriteError
from docstore.infrastructure.filesystem_backend import FilesystemBackend
from docstore.infrastructure.memory_backend import MemoryBackend
from docstore.services.document_store import DocumentStore, build_document_store

SUMMARY = SanitizedPath("data/summaries/b3a4c5dc.json")


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return DocumentStore(backend)


async def test_write_then_read_scenario(store):
    result = await store.write(SUMMARY, {"score": 42})
    assert result.path == SUMMARY

    read = await store.read(SUMMARY)
    assert read.found
    assert read.data == {"score": 42}
    assert read.cache_control == "no-store"


async def test_round_trip_in_both_rendering_modes(store):
    document = {"deck": ["a", "b"], "meta": {"n": 1.5, "ok": True, "none": None}}
    for pretty in (True, False):
        await store.write(SanitizedPath("deck.json"), document, pretty=pretty)
        for read_pretty in (True, False):
            result = await store.read(SanitizedPath("deck.json"), pretty=read_pretty)
            assert result.data == document


async def test_write_reports_utf8_byte_length(store, backend):
    result = await store.write(SanitizedPath("x.json"), {"name": "Café"}, pretty=False)
    assert backend.files["x.json"] == '{"name":"Café"}'
    assert result.bytes == len('{"name":"Café"}'.encode("utf-8"))


async def test_stored_format_follows_write_flag(store, backend):
    await store.write(SanitizedPath("p.json"), {"a": 1}, pretty=True)
    await store.write(SanitizedPath("c.json"), {"a": 1}, pretty=False)
    assert backend.files["p.json"] == '{\n  "a": 1\n}'
    assert backend.files["c.json"] == '{"a":1}'


async def test_read_rendering_is_independent_of_storage(store):
    await store.write(SanitizedPath("c.json"), {"a": 1}, pretty=False)
    result = await store.read(SanitizedPath("c.json"), pretty=True)
    assert result.content == b'{\n  "a": 1\n}'


async def test_write_is_idempotent(store, backend):
    await store.write(SUMMARY, {"score": 42})
    once = dict(backend.files), set(backend.directories)
    await store.write(SUMMARY, {"score": 42})
    assert (dict(backend.files), set(backend.directories)) == once


async def test_write_replaces_whole_document(store):
    await store.write(SanitizedPath("x.json"), {"a": 1, "b": 2})
    await store.write(SanitizedPath("x.json"), {"c": 3})
    assert (await store.read(SanitizedPath("x.json"))).data == {"c": 3}


async def test_never_written_path_is_not_found(store):
    result = await store.read(SanitizedPath("nope.json"))
    assert not result.found
    assert result.content is None


async def test_write_creates_intermediate_directories(store, backend):
    await store.write(SanitizedPath("a/b/c/d.json"), [])
    assert {"a", "a/b", "a/b/c"} <= backend.directories


async def test_empty_stored_file_reads_as_empty_object(store, backend):
    backend.files["empty.json"] = ""
    result = await store.read(SanitizedPath("empty.json"))
    assert result.data == {}
    assert result.content == b"{}"


async def test_malformed_stored_file_raises_read_error(store, backend):
    backend.files["bad.json"] = "{oops"
    with pytest.raises(DocumentReadError) as exc:
        await store.read(SanitizedPath("bad.json"))
    assert exc.value.context.document_path == "bad.json"


async def test_reading_directory_raises_read_error(store, backend):
    backend.directories.add("dir.json")
    with pytest.raises(DocumentReadError):
        await store.read(SanitizedPath("dir.json"))


async def test_parent_blocked_by_file_raises_write_error(store, backend):
    await store.write(SanitizedPath("a.json"), {})
    with pytest.raises(DocumentWriteError):
        await store.write(SanitizedPath("a.json/b.json"), {})


async def test_unserializable_document_raises_write_error(store, backend):
    with pytest.raises(DocumentWriteError):
        await store.write(SanitizedPath("x.json"), {"bad": {1, 2}})
    assert "x.json" not in backend.files


async def test_list_root(store):
    await store.write(SanitizedPath("top.json"), {})
    await store.write(SanitizedPath("nested/doc.json"), {})
    assert await store.list_root() == [
        DirectoryEntry(name="nested", dir=True, file=False),
        DirectoryEntry(name="top.json", dir=False, file=True),
    ]


class _SlowBackend(MemoryBackend):
    """Yields mid-write and records how many writes overlap."""

    def __init__(self):
        super().__init__()
        self.active = 0
        self.max_active = 0

    async def write_bytes(self, path, data):
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        await asyncio.sleep(0.001)
        await super().write_bytes(path, data)
        self.active -= 1


async def test_concurrent_writes_to_one_path_are_serialized():
    backend = _SlowBackend()
    store = DocumentStore(backend, serialize_writes=True)

    await asyncio.gather(*(
        store.write(SanitizedPath("hot.json"), {"n": i}) for i in range(10)
    ))

    assert backend.max_active == 1
    assert (await store.read(SanitizedPath("hot.json"))).data["n"] in range(10)


async def test_writes_overlap_without_serialization():
    backend = _SlowBackend()
    store = DocumentStore(backend, serialize_writes=False)

    await asyncio.gather(*(
        store.write(SanitizedPath("hot.json"), {"n": i}) for i in range(10)
    ))

    assert backend.max_active > 1


async def test_different_paths_write_concurrently():
    backend = _SlowBackend()
    store = DocumentStore(backend, serialize_writes=True)

    await asyncio.gather(*(
        store.write(SanitizedPath(f"doc{i}.json"), {"n": i}) for i in range(5)
    ))

    assert backend.max_active > 1


async def test_filesystem_round_trip(data_root):
    store = DocumentStore(FilesystemBackend(data_root))
    await store.write(SUMMARY, {"score": 42}, pretty=False)

    assert (data_root / SUMMARY).read_text(encoding="utf-8") == '{"score":42}'
    assert (await store.read(SUMMARY)).data == {"score": 42}


async def test_build_document_store_uses_settings(make_settings, data_root):
    store = build_document_store(
        make_settings(atomic_writes=False, serialize_writes=False),
    )
    assert store.root == str(data_root.resolve())
    assert store.serialize_writes is False
    assert store.backend.atomic_writes is False


async def test_lone_surrogate_write_raises_write_error_before_storage(store, backend):
    with pytest.raises(DocumentWriteError):
        await store.write(SanitizedPath("s/deep/x.json"), {"a": "\ud800"})
    assert backend.files == {}
    assert backend.directories == {""}


async def test_lone_surrogate_write_on_disk_creates_nothing(data_root):
    store = DocumentStore(FilesystemBackend(data_root))
    with pytest.raises(DocumentWriteError):
        await store.write(SanitizedPath("s/x.json"), {"a": "\ud800"})
    assert list(data_root.iterdir()) == []


async def test_stored_lone_surrogate_raises_read_error(store, backend):
    backend.files["s.json"] = '{"a":"\\ud800"}'
    with pytest.raises(DocumentReadError):
        await store.read(SanitizedPath("s.json"))


async def test_stored_deep_nesting_raises_read_error(store, backend):
    backend.files["deep.json"] = "[" * 100_000 + "]" * 100_000
    with pytest.raises(DocumentReadError):
        await store.read(SanitizedPath("deep.json"))
