"""
Record normalization.

Everything written to or read from a store passes through :func:`normalize`, so
callers see the same shape for a record whether it was just saved or loaded back
from disk: a plain ``dict`` with string keys, in the input's key order, holding only
JSON-compatible values.
"""

from __future__ import annotations

import enum
from typing import Any, Iterable, Mapping

from pydantic_core import to_jsonable_python

Record = dict[str, Any]

# Returned in place of a record when there is none; never an empty dict.
NO_RECORD = None


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, enum.Enum):
        return str(key.value)
    return str(key)


def _normalize_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {_normalize_key(k): _normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_value(v) for v in value]
    return to_jsonable_python(value)


def normalize(data: Mapping[Any, Any] | None) -> Record | None:
    """
    Convert ``data`` into the canonical record representation.

    ``None`` becomes :data:`NO_RECORD`. Any other non-mapping raises ``TypeError``.
    The result is always a fresh object; ``data`` itself is never modified.
    """
    if data is None:
        return NO_RECORD
    if not isinstance(data, Mapping):
        raise TypeError(f"record data must be a mapping, got {type(data).__name__}")
    return _normalize_value(data)


def normalize_many(records: Iterable[Mapping[Any, Any] | None]) -> list[Record | None]:
    return [normalize(r) for r in records]
