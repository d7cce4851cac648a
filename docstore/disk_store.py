from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from pydantic import TypeAdapter, ValidationError

from .errors import NestedTransactionError, StoreCorruptedError
from .interfaces import Document, TransactionalDocumentStore
from .json_store import atomic_write_text, dumps_json, loads_document, read_json_text
from .locks import GLOBAL_PATH_LOCKS, PathLockRegistry

logger = logging.getLogger(__name__)

_DOCUMENT_ADAPTER: TypeAdapter[dict[str, dict[str, Any]]] = TypeAdapter(dict[str, dict[str, Any]])


class DiskJsonDocumentStore(TransactionalDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Every transaction reads the file fresh; nothing is cached between transactions.
    - Missing or empty files load as an empty document; malformed ones raise.
    - Writes atomically, and only when the serialized document actually changed.
    """

    def __init__(self, path: Path, *, pretty: bool = True, locks: PathLockRegistry = GLOBAL_PATH_LOCKS):
        self._path = Path(path)
        self._pretty = pretty
        self._locks = locks

    @property
    def path(self) -> Path:
        return self._path

    @contextmanager
    def transaction(self, readonly: bool = False) -> Iterator[Document]:
        if self._locks.held_by_current_thread(self._path):
            raise NestedTransactionError(f"transaction already in progress for {self._path}")

        lock = self._locks.lock_for(self._path)
        with lock:
            self._locks.mark_held(self._path)
            try:
                raw = read_json_text(self._path)
                doc = self._parse(raw)
                yield doc
                if not readonly:
                    self._commit(doc, raw)
            finally:
                self._locks.mark_released(self._path)

    def _parse(self, raw: str | None) -> Document:
        if raw is None:
            return {}
        loaded = loads_document(raw, path=self._path)
        try:
            return _DOCUMENT_ADAPTER.validate_python(loaded)
        except ValidationError as e:
            raise StoreCorruptedError(f"unexpected document shape in {self._path}: {e}") from e

    def _commit(self, doc: Document, previous: str | None) -> None:
        text = dumps_json(doc, pretty=self._pretty, sort_keys=False)
        if text == previous or (previous is None and not doc):
            logger.debug("commit skipped, %s unchanged", self._path)
            return
        atomic_write_text(self._path, text)
        logger.debug("committed %d collection(s) to %s", len(doc), self._path)
