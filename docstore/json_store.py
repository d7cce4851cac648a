from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .errors import StoreCorruptedError


def read_json_text(path: Path) -> str | None:
    """
    Read the raw document text from disk.

    Returns None for missing or empty files.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    return raw


def loads_document(raw: str, *, path: Path | None = None) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StoreCorruptedError(f"invalid JSON in {path or '<document>'}: {e}") from e


def dumps_json(payload: Any, *, pretty: bool = True, sort_keys: bool = False) -> str:
    indent = 2 if pretty else None
    return json.dumps(payload, indent=indent, sort_keys=sort_keys, ensure_ascii=False) + "\n"


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + f".{os.getpid()}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
