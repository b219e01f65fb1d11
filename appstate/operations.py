"""Operations shared by every state container variant.

All functions work on a plain ``dict`` mapping text keys to optional values.
A key mapped to ``None`` is treated exactly like a missing key by every read,
and a stored value that fails the requested type check reads as missing too.
Nothing in here raises for a missing key or a type mismatch.
"""

import logging
import types
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Dict, Optional, Union, get_args, get_origin

logger = logging.getLogger(__name__)

StateMap = Dict[str, Any]

_UnionType = getattr(types, "UnionType", None)
_NoneType = type(None)


def matches_type(value: Any, expected_type: Any) -> bool:
    """Runtime check used by every typed read.

    ``bool`` never matches ``int`` and ``int`` never matches ``float``.
    Parameterized generics (``list[str]``, ``dict[str, int]``,
    ``tuple[int, ...]``) are checked element by element.
    """
    if expected_type is None or expected_type is Any or expected_type is object:
        return True
    origin = get_origin(expected_type)
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        return any(matches_type(value, arg) for arg in get_args(expected_type))
    if value is None:
        return expected_type is _NoneType
    if origin is None:
        return _matches_class(value, expected_type)
    if not _matches_class(value, origin):
        return False
    args = get_args(expected_type)
    if not args:
        return True
    if isinstance(value, Mapping) and len(args) == 2:
        key_type, value_type = args
        return all(
            matches_type(k, key_type) and matches_type(v, value_type)
            for k, v in value.items()
        )
    if isinstance(value, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            return all(matches_type(item, args[0]) for item in value)
        return len(args) == len(value) and all(
            matches_type(item, arg) for item, arg in zip(value, args)
        )
    if isinstance(value, Iterator):
        return True
    if isinstance(value, Iterable) and len(args) == 1:
        return all(matches_type(item, args[0]) for item in value)
    return True


def accepts_none(expected_type: Any) -> bool:
    """True for ``Optional[T]`` and other unions that include ``None``."""
    origin = get_origin(expected_type)
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        return _NoneType in get_args(expected_type)
    return False


def _matches_class(value: Any, cls: Any) -> bool:
    if not isinstance(cls, type):
        return False
    if isinstance(value, bool) and cls is int:
        return False
    return isinstance(value, cls)


def set_value(
    entries: StateMap,
    value: Any,
    key: str,
    allow_override: bool = True,
    log: Optional[logging.Logger] = None,
) -> Any:
    """Write ``value`` under ``key`` and return what was stored there before.

    A key holding ``None`` counts as absent, so it is written even when
    ``allow_override`` is false.
    """
    previous = entries.get(key)
    if previous is None or allow_override:
        entries[key] = value
    else:
        (log or logger).debug("Kept existing value for %r, override not allowed", key)
    return previous


def merge(
    entries: StateMap,
    incoming: Mapping,
    allow_override: bool = True,
    log: Optional[logging.Logger] = None,
) -> StateMap:
    """Merge ``incoming`` into ``entries`` and return a copy of the prior entries.

    Each key is resolved with the same rule as :func:`set_value`.
    """
    prior = dict(entries)
    for key, value in incoming.items():
        set_value(entries, value, key, allow_override, log)
    (log or logger).debug(
        "Merged %d key(s) into state (allow_override=%s)", len(incoming), allow_override
    )
    return prior


def lookup(entries: StateMap, key: str, default: Any = None, expected_type: Any = None) -> Any:
    """Return the value at ``key``, or ``default`` when it is missing or mismatched.

    Without an explicit ``expected_type`` a non-None ``default`` implies one.
    """
    if expected_type is None and default is not None:
        expected_type = type(default)
    value = entries.get(key)
    if value is None or not matches_type(value, expected_type):
        return default
    return value


def type_of(entries: StateMap, key: str) -> Optional[type]:
    value = entries.get(key)
    if value is None:
        return None
    return type(value)


def filter_by_type(entries: StateMap, expected_type: Any) -> StateMap:
    return {
        key: value
        for key, value in entries.items()
        if value is not None and matches_type(value, expected_type)
    }


def remove(entries: StateMap, key: str, log: Optional[logging.Logger] = None) -> Any:
    """Delete ``key`` and return the value that was stored there."""
    if key not in entries:
        (log or logger).debug("Nothing to remove for %r", key)
        return None
    return entries.pop(key)


def entries_equal(left: Mapping, right: Mapping) -> bool:
    if left.keys() != right.keys():
        return False
    return all(left[key] == right[key] for key in left)
