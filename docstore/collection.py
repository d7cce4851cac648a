from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from . import codec
from .codec import Record
from .ids import ALL, record_keys
from .json_store import dumps_json

if TYPE_CHECKING:
    from .engine import DocumentStore, RecordId


class Collection:
    """A handle on one named collection; every call goes back to the store."""

    def __init__(self, name: Any, store: "DocumentStore"):
        self._name = str(name)
        self._store = store

    def __repr__(self) -> str:
        return f"Collection({self._name!r}, {self._store!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def store(self) -> "DocumentStore":
        return self._store

    def save(self, data: Mapping[Any, Any] | None = None) -> str:
        return self._store.save(self._name, data or {})

    create = save

    def update(self, record_id: "RecordId", updates: Mapping[Any, Any]) -> Record:
        return self._store.update(self._name, record_id, updates)

    def find(self, record_id: "RecordId" = ALL) -> Any:
        return self._store.find(self._name, record_id)

    @property
    def all(self) -> list[Record]:
        return self.find(ALL)

    def __getitem__(self, record_id: "RecordId") -> Any:
        return self.find(record_id)

    def __setitem__(self, record_id: "RecordId", data: Mapping[Any, Any]) -> None:
        record = codec.normalize(data) or {}
        record.pop("id", None)
        record["id"] = str(record_id)
        self.save(record)

    def delete(self, record_id: "RecordId") -> "RecordId":
        self._store.delete(self._name, record_id)
        return record_id

    destroy = delete

    def to_dict(self) -> dict[str, Any]:
        """id -> record for every record; the cached ``"all"`` list is left out, as in ``size``."""
        with self._store.transaction(readonly=True) as doc:
            records = doc.get(self._name, {})
            return {k: codec.normalize(records[k]) for k in record_keys(records)}

    @property
    def size(self) -> int:
        with self._store.transaction(readonly=True) as doc:
            return len(record_keys(doc.get(self._name, {})))

    def count(self) -> int:
        return self.size

    def __len__(self) -> int:
        return self.size

    def to_json(self, *, pretty: bool = True) -> str:
        return dumps_json(self.to_dict(), pretty=pretty)

    @contextmanager
    def transaction(self, readonly: bool = False) -> Iterator[dict[str, Any]]:
        """
        Exclusive access to this collection's own id -> record mapping.

        On a writable transaction the collection is created if it does not exist yet.
        """
        with self._store.transaction(readonly=readonly) as doc:
            if readonly:
                yield doc.get(self._name, {})
            else:
                yield doc.setdefault(self._name, {})
