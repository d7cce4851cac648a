from __future__ import annotations


class DocStoreError(Exception):
    """Base class for errors raised by docstore."""


class IdNotDiscoverableError(DocStoreError, KeyError):
    """Neither an ``id`` nor an ``_id`` field is present on the data."""

    def __init__(self, data: object):
        super().__init__(f"no id discoverable for {data!r}")
        self.data = data

    def __str__(self) -> str:
        return str(self.args[0])


class BlankIdError(IdNotDiscoverableError):
    """An id field is present but resolves to an empty/whitespace string."""


class RecordNotFoundError(DocStoreError, KeyError):
    def __init__(self, collection: str, record_id: str):
        super().__init__(f"no record {record_id!r} in collection {collection!r}")
        self.collection = collection
        self.record_id = record_id

    def __str__(self) -> str:
        return str(self.args[0])


class StoreCorruptedError(DocStoreError):
    """The backing file exists but does not hold a valid document."""


class NestedTransactionError(DocStoreError, RuntimeError):
    """A transaction was opened while another one on the same file is active in this thread."""
