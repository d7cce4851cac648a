from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from docstore import DocumentStore, NestedTransactionError, StoreCorruptedError
from docstore.disk_store import DiskJsonDocumentStore
from docstore.json_store import atomic_write_text, dumps_json, read_json_text
from docstore.locks import GLOBAL_PATH_LOCKS


def test_missing_and_empty_files_load_as_empty(tmp_path: Path):
    path = tmp_path / "store.json"
    backend = DiskJsonDocumentStore(path)

    with backend.transaction(readonly=True) as doc:
        assert doc == {}

    path.write_text("  \n", encoding="utf-8")
    with backend.transaction(readonly=True) as doc:
        assert doc == {}


def test_commit_writes_atomically(tmp_path: Path):
    path = tmp_path / "store.json"
    backend = DiskJsonDocumentStore(path)

    with backend.transaction() as doc:
        doc["posts"] = {"1": {"id": "1"}}

    assert json.loads(path.read_text(encoding="utf-8")) == {"posts": {"1": {"id": "1"}}}
    assert list(tmp_path.iterdir()) == [path]


def test_error_in_body_commits_nothing(tmp_path: Path):
    path = tmp_path / "store.json"
    atomic_write_text(path, dumps_json({"posts": {"1": {"id": "1"}}}))
    before = path.read_text(encoding="utf-8")
    backend = DiskJsonDocumentStore(path)

    with pytest.raises(ValueError):
        with backend.transaction() as doc:
            doc["posts"].clear()
            doc["tags"] = {}
            raise ValueError("boom")

    assert path.read_text(encoding="utf-8") == before


def test_unchanged_document_is_not_rewritten(tmp_path: Path, caplog):
    path = tmp_path / "store.json"
    atomic_write_text(path, dumps_json({"posts": {}}))
    mtime = path.stat().st_mtime_ns
    backend = DiskJsonDocumentStore(path)

    with caplog.at_level(logging.DEBUG, logger="docstore.disk_store"):
        with backend.transaction() as doc:
            assert doc == {"posts": {}}

    assert path.stat().st_mtime_ns == mtime
    assert "commit skipped" in caplog.text


def test_compact_output_when_not_pretty(tmp_path: Path):
    path = tmp_path / "store.json"
    backend = DiskJsonDocumentStore(path, pretty=False)

    with backend.transaction() as doc:
        doc["posts"] = {"1": {"id": "1"}}

    assert path.read_text(encoding="utf-8") == '{"posts": {"1": {"id": "1"}}}\n'


def test_nested_transaction_is_rejected(store, store_path):
    with pytest.raises(NestedTransactionError):
        with store.transaction() as doc:
            doc["posts"] = {}
            store.find("posts")

    assert not store_path.exists()
    assert not GLOBAL_PATH_LOCKS.held_by_current_thread(store_path)
    # the lock was released, later transactions still work
    assert store.save("posts", {"k": "v"}) == "1"


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"posts": 3}'])
def test_malformed_file_raises(store, store_path, content):
    store_path.write_text(content, encoding="utf-8")

    with pytest.raises(StoreCorruptedError):
        store.find("posts")
    with pytest.raises(StoreCorruptedError):
        store.save("posts", {"k": "v"})

    assert store_path.read_text(encoding="utf-8") == content


def test_read_json_text(tmp_path: Path):
    path = tmp_path / "x.json"

    assert read_json_text(path) is None
    path.write_text('{"a": {}}', encoding="utf-8")
    assert read_json_text(path) == '{"a": {}}'


def test_store_accepts_custom_backend(tmp_path: Path):
    backend = DiskJsonDocumentStore(tmp_path / "custom.json")
    store = DocumentStore(backend=backend)

    store.save("posts", {"k": "v"})

    assert store.path == tmp_path / "custom.json"
    assert (tmp_path / "custom.json").exists()
