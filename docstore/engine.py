from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping

from . import codec
from .codec import Record
from .disk_store import DiskJsonDocumentStore
from .errors import RecordNotFoundError
from .ids import ALL, next_id_for, record_keys
from .interfaces import Document, TransactionalDocumentStore
from .json_store import dumps_json
from .paths import default_path, ensure_parent, remove_path
from .settings import Settings, get_settings, load_env

if TYPE_CHECKING:
    from .collection import Collection

logger = logging.getLogger(__name__)

RecordId = str | int | None

FindBlock = Callable[[Any], Any]


def _is_all(record_id: RecordId) -> bool:
    return record_id is None or str(record_id) == ALL


def _collection_for(doc: Document, name: str) -> dict[str, Any]:
    data = doc.get(name)
    if data is None:
        data = {}
        doc[name] = data
    return data


class DocumentStore:
    """
    Named collections of records, persisted together in a single JSON file.

    Every operation runs in its own transaction against the file, so each call sees
    the latest committed state and either fully commits or leaves the file untouched.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        settings: Settings | None = None,
        pretty: bool | None = None,
        backend: TransactionalDocumentStore | None = None,
    ):
        if backend is not None:
            self._backend = backend
            self._path = backend.path
            return

        if path is None or pretty is None:
            settings = settings or get_settings()
            if path is None:
                path = default_path(settings)
            if pretty is None:
                pretty = settings.pretty

        self._path = Path(path)
        ensure_parent(self._path)
        self._backend = DiskJsonDocumentStore(self._path, pretty=pretty)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------
    # Transactions / collections
    # -------------------------------------------------------------------
    def transaction(self, readonly: bool = False) -> AbstractContextManager[Document]:
        """Exclusive access to the whole document; commits on normal exit."""
        return self._backend.transaction(readonly=readonly)

    def collection(self, name: Any) -> "Collection":
        from .collection import Collection

        return Collection(name, self)

    __getitem__ = collection

    # -------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------
    def save(self, collection: Any, data: Mapping[Any, Any]) -> str:
        """Insert or replace a record and return its id."""
        record = codec.normalize(data)
        if record is None:
            record = {}
        name = str(collection)
        with self.transaction() as doc:
            records = _collection_for(doc, name)
            record_id = next_id_for(records, record)
            record["id"] = record_id
            records[record_id] = record
        logger.debug("saved %s/%s", name, record_id)
        return record_id

    create = save

    def find(self, collection: Any, record_id: RecordId = ALL, block: FindBlock | None = None) -> Any:
        """
        Look up one record, or every record when ``record_id`` is ``"all"``/None.

        Without ``block`` this is a read: a missing record comes back as None and a
        missing collection as an empty list.

        With ``block`` for a single id, the block's result replaces the stored record.
        A None result is not stored as a null value: it deletes the record, so the
        key is absent afterwards.

        With ``block`` for ``"all"``, the block gets the record list and its result
        is stored as one list under the literal key ``"all"``; that key is never
        returned as a record.
        """
        name = str(collection)
        if block is None:
            with self.transaction(readonly=True) as doc:
                records = doc.get(name, {})
                if _is_all(record_id):
                    return [codec.normalize(records[k]) for k in record_keys(records)]
                return codec.normalize(records.get(str(record_id)))

        with self.transaction() as doc:
            records = _collection_for(doc, name)
            if _is_all(record_id):
                listing = [codec.normalize(records[k]) for k in record_keys(records)]
                result = block(listing)
                cached = codec.normalize_many(result or [])
                records[ALL] = cached
                return cached

            key = str(record_id)
            result = codec.normalize(block(codec.normalize(records.get(key))))
            if result is None:
                records.pop(key, None)
                return None
            result["id"] = key
            records[key] = result
            return result

    def update(self, collection: Any, record_id: RecordId, updates: Mapping[Any, Any]) -> Record:
        """Merge ``updates`` into an existing record and return the merged record."""
        if _is_all(record_id):
            raise ValueError("update requires a single record id")
        name = str(collection)
        changes = codec.normalize(updates) or {}

        def merge(record: Record | None) -> Record:
            if record is None:
                raise RecordNotFoundError(name, str(record_id))
            record.update(changes)
            return record

        return self.find(name, record_id, merge)

    def delete(self, collection: Any, record_id: RecordId = ALL) -> Record | None:
        """
        Remove one record and return it (None if absent), or clear the whole
        collection when ``record_id`` is ``"all"``/None. A cleared collection stays
        present, empty.
        """
        name = str(collection)
        with self.transaction() as doc:
            records = _collection_for(doc, name)
            if _is_all(record_id):
                records.clear()
                logger.debug("cleared %s", name)
                return None
            deleted = records.pop(str(record_id), None)
        if deleted is not None:
            logger.debug("deleted %s/%s", name, record_id)
        return codec.normalize(deleted)

    destroy = delete

    # -------------------------------------------------------------------
    # Dump / cleanup
    # -------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        with self.transaction(readonly=True) as doc:
            return codec.normalize(doc) or {}

    def to_json(self, *, pretty: bool = True) -> str:
        return dumps_json(self.to_dict(), pretty=pretty)

    def rm_f(self) -> bool:
        """Remove the backing file. Never raises."""
        return remove_path(self._path)

    def rm_rf(self) -> bool:
        return remove_path(self._path, recursive=True)

    truncate = rm_f


def open_store(settings: Settings | None = None, env_file: str | Path | None = None) -> DocumentStore:
    """
    Build a store at the configured default location.

    Loads ``env_file`` first when given, so its variables feed the settings.
    """
    if settings is None:
        if env_file is not None:
            load_env(env_file)
        settings = get_settings()
    return DocumentStore(settings=settings)
