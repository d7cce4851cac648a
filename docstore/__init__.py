from __future__ import annotations

from .aio import AsyncCollection, AsyncDocumentStore
from .codec import NO_RECORD, Record, normalize
from .collection import Collection
from .engine import DocumentStore, open_store
from .errors import (
    BlankIdError,
    DocStoreError,
    IdNotDiscoverableError,
    NestedTransactionError,
    RecordNotFoundError,
    StoreCorruptedError,
)
from .ids import ALL, id_for, next_id_for
from .settings import Settings, get_settings
from .tmp import make_temporary_store, temporary_store

__version__ = "0.1.0"

__all__ = [
    "ALL",
    "NO_RECORD",
    "AsyncCollection",
    "AsyncDocumentStore",
    "BlankIdError",
    "Collection",
    "DocStoreError",
    "DocumentStore",
    "IdNotDiscoverableError",
    "NestedTransactionError",
    "Record",
    "RecordNotFoundError",
    "Settings",
    "StoreCorruptedError",
    "get_settings",
    "id_for",
    "make_temporary_store",
    "next_id_for",
    "normalize",
    "open_store",
    "temporary_store",
]
