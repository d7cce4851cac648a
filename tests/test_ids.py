from __future__ import annotations

import pytest

from docstore import BlankIdError, IdNotDiscoverableError, id_for, next_id_for


def test_id_for_prefers_id_over_underscore_id():
    assert id_for({"id": 1, "_id": 2}) == "1"
    assert id_for({"_id": 2}) == "2"


def test_id_for_raises_when_absent():
    with pytest.raises(IdNotDiscoverableError, match="no id discoverable"):
        id_for({"k": "v"})


def test_id_not_discoverable_is_a_key_error():
    with pytest.raises(KeyError):
        id_for({})
    assert issubclass(BlankIdError, IdNotDiscoverableError)


def test_next_id_uses_explicit_id_as_is():
    data = {"id": " x "}

    assert next_id_for({"x": {}}, data) == " x "
    assert data == {"id": " x "}


def test_next_id_assigns_size_plus_one():
    data = {"k": "v"}

    assert next_id_for({"1": {}, "2": {}}, data) == "3"
    assert data["id"] == "3"


def test_next_id_ignores_reserved_all_key():
    assert next_id_for({"1": {}, "all": []}, {}) == "2"


def test_next_id_skips_taken_keys():
    # 1..5 with 3 deleted
    collection = {"1": {}, "2": {}, "4": {}, "5": {}}

    assert next_id_for(collection, {}) == "6"


def test_next_id_replaces_blank_id():
    data = {"id": "  "}

    assert next_id_for({}, data) == "1"
    assert data["id"] == "1"
