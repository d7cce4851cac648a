from __future__ import annotations

import os
import secrets
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .engine import DocumentStore


def temporary_path(directory: str | Path | None = None) -> Path:
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    name = f"docstore-{os.getpid()}-{os.getppid()}-{time.time():.6f}-{secrets.token_hex(4)}.json"
    return base / name


def make_temporary_store(directory: str | Path | None = None, *, pretty: bool = True) -> DocumentStore:
    """A store at a fresh temp path. The caller owns cleanup (``store.rm_f()``)."""
    return DocumentStore(temporary_path(directory), pretty=pretty)


@contextmanager
def temporary_store(directory: str | Path | None = None, *, pretty: bool = True) -> Iterator[DocumentStore]:
    """Yield a store at a fresh temp path and remove its file afterwards, even on error."""
    store = make_temporary_store(directory, pretty=pretty)
    try:
        yield store
    finally:
        store.rm_rf()
