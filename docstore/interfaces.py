from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Protocol

Document = dict[str, dict[str, Any]]


class TransactionalDocumentStore(Protocol):
    """
    Persistence primitive the record engine is built on: a single nested mapping
    persisted to one file, accessed only through exclusive transactions.
    """

    @property
    def path(self) -> Path:
        ...

    def transaction(self, readonly: bool = False) -> AbstractContextManager[Document]:
        """
        Yield the whole document. Mutations are committed atomically when the block
        exits normally and discarded when it raises or when ``readonly`` is set.
        """
        ...
