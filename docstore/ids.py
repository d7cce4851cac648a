from __future__ import annotations

from typing import Any, Mapping

from .errors import BlankIdError, IdNotDiscoverableError

ALL = "all"

ID_KEYS = ("id", "_id")


def record_keys(collection_data: Mapping[str, Any]) -> list[str]:
    """Keys of real records, leaving out the reserved ``all`` key."""
    return [k for k in collection_data if k != ALL]


def id_for(data: Mapping[str, Any]) -> str:
    """
    Return the first present value among ``id`` and ``_id``, stringified.

    Raises IdNotDiscoverableError when neither key is present.
    """
    for key in ID_KEYS:
        if key in data:
            value = data[key]
            return "" if value is None else str(value)
    raise IdNotDiscoverableError(data)


def _explicit_id(data: Mapping[str, Any]) -> str:
    record_id = id_for(data)
    if not record_id.strip():
        raise BlankIdError(data)
    return record_id


def next_id_for(collection_data: Mapping[str, Any], data: dict[str, Any]) -> str:
    """
    Resolve the id a record will be stored under.

    An explicit, non-blank ``id``/``_id`` is used as-is, even if it overwrites an
    existing record. Otherwise the next sequential id (record count + 1) is written
    into ``data["id"]``; it is bumped past any key already taken so that earlier
    deletions never cause an existing record to be overwritten.
    """
    try:
        return _explicit_id(data)
    except IdNotDiscoverableError:
        pass

    n = len(record_keys(collection_data)) + 1
    while str(n) in collection_data:
        n += 1
    data["id"] = str(n)
    return id_for(data)
