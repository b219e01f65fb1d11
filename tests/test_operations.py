from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from appstate import matches_type
from appstate import operations


def test_bool_is_not_int():
    assert not matches_type(True, int)
    assert matches_type(True, bool)
    assert matches_type(1, int)


def test_int_is_not_float():
    assert not matches_type(1, float)
    assert matches_type(1.0, float)


def test_none_and_any():
    assert not matches_type(None, int)
    assert matches_type(None, Optional[int])
    assert matches_type("x", Any)
    assert matches_type(3, Optional[int])
    assert not matches_type("3", Optional[int])


def test_generic_collections():
    assert matches_type(["a", "b"], List[str])
    assert not matches_type(["a", 1], List[str])
    assert matches_type({"a": 1}, Dict[str, int])
    assert not matches_type({"a": "1"}, Dict[str, int])
    assert matches_type((1, 2, 3), Tuple[int, ...])
    assert matches_type((1, "a"), Tuple[int, str])
    assert not matches_type((1, "a", 2), Tuple[int, str])
    assert matches_type({1, 2}, set[int])
    assert not matches_type([1, 2], set[int])


def test_lookup_infers_type_from_default():
    entries = {"age": 42, "name": "Bob"}
    assert operations.lookup(entries, "age", 0) == 42
    assert operations.lookup(entries, "name", 0) == 0
    assert operations.lookup(entries, "name", expected_type=str) == "Bob"


def test_set_value_returns_previous():
    entries = {"a": 1}
    assert operations.set_value(entries, 2, "a") == 1
    assert operations.set_value(entries, 3, "a", allow_override=False) == 2
    assert entries == {"a": 2}


def test_set_value_without_override_replaces_unset():
    entries = {"a": None}
    assert operations.set_value(entries, 1, "a", allow_override=False) is None
    assert entries == {"a": 1}


def test_merge_matches_set_value_per_key():
    base = {"a": 1, "b": None, "c": "x"}
    incoming = {"a": 2, "b": 3, "c": None, "d": None}
    merged = dict(base)
    operations.merge(merged, incoming, allow_override=False)
    one_by_one = dict(base)
    for key, value in incoming.items():
        operations.set_value(one_by_one, value, key, allow_override=False)
    assert merged == one_by_one == {"a": 1, "b": 3, "c": "x", "d": None}


def test_entries_equal():
    assert operations.entries_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
    assert not operations.entries_equal({"a": None}, {"b": None})
    assert not operations.entries_equal({"a": 1}, {"a": 1, "b": 2})


def test_stored_iterator_is_not_consumed():
    entries = {"numbers": iter([1, 2, 3])}
    assert operations.lookup(entries, "numbers", expected_type=Iterator[int]) is entries["numbers"]
    assert operations.filter_by_type(entries, Iterable[int]) == entries
    assert list(entries["numbers"]) == [1, 2, 3]


def test_accepts_none():
    assert operations.accepts_none(Optional[int])
    assert operations.accepts_none(Union[str, None])
    assert not operations.accepts_none(Union[str, int])
    assert not operations.accepts_none(int)
