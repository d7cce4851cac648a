from __future__ import annotations

import asyncio
from typing import Any, Mapping

from .codec import Record
from .collection import Collection
from .engine import DocumentStore, FindBlock, RecordId
from .ids import ALL


class AsyncDocumentStore:
    """
    Async wrapper around the blocking document store.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def sync(self) -> DocumentStore:
        return self._store

    def collection(self, name: Any) -> "AsyncCollection":
        return AsyncCollection(self._store.collection(name))

    async def save(self, collection: Any, data: Mapping[Any, Any]) -> str:
        return await asyncio.to_thread(self._store.save, collection, data)

    async def find(self, collection: Any, record_id: RecordId = ALL, block: FindBlock | None = None) -> Any:
        return await asyncio.to_thread(self._store.find, collection, record_id, block)

    async def update(self, collection: Any, record_id: RecordId, updates: Mapping[Any, Any]) -> Record:
        return await asyncio.to_thread(self._store.update, collection, record_id, updates)

    async def delete(self, collection: Any, record_id: RecordId = ALL) -> Record | None:
        return await asyncio.to_thread(self._store.delete, collection, record_id)

    async def to_dict(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.to_dict)


class AsyncCollection:
    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def save(self, data: Mapping[Any, Any] | None = None) -> str:
        return await asyncio.to_thread(self._collection.save, data)

    create = save

    async def find(self, record_id: RecordId = ALL) -> Any:
        return await asyncio.to_thread(self._collection.find, record_id)

    async def all(self) -> list[Record]:
        return await self.find(ALL)

    async def update(self, record_id: RecordId, updates: Mapping[Any, Any]) -> Record:
        return await asyncio.to_thread(self._collection.update, record_id, updates)

    async def delete(self, record_id: RecordId) -> RecordId:
        return await asyncio.to_thread(self._collection.delete, record_id)

    async def size(self) -> int:
        return await asyncio.to_thread(self._collection.count)
