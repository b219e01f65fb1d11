"""Dynamically keyed state containers.

A container holds text keys mapped to optional values of any type. Reads
never fail: a missing key, a key stored as ``None`` and a value of the wrong
type all come back as ``None`` (or the caller's default).

Two ownership variants are provided:
  - GlobalState: duplicating a handle aliases the same storage, so every
    handle sees every write. Use it for state shared across an application.
  - LocalState: duplicating a handle deep-copies the storage, so copies
    diverge after duplication. Use it for state owned by one component.

Neither variant locks. Writes to a GlobalState from several threads must be
serialized by the caller.
"""

import copy
import logging
import time
from abc import ABC, abstractmethod
from typing import (
    Any, Dict, Iterator, List, Mapping, Optional, Protocol, Set, Tuple, runtime_checkable,
)

from . import operations
from .defaults import DefaultRegistry, default_registry
from .operations import StateMap


@runtime_checkable
class ApplicationState(Protocol):
    """Operation set every state container provides."""

    @property
    def date_created(self) -> float: ...

    def set_state(self, value: Any, key: str, allow_override: bool = True) -> Any: ...

    def merge_state(self, state: Mapping[str, Any], allow_override: bool = True) -> StateMap: ...

    def lookup(self, key: str, default: Any = None, expected_type: Any = None) -> Any: ...

    def type_of(self, key: str) -> Optional[type]: ...

    def filter_by_type(self, expected_type: Any) -> StateMap: ...

    def remove(self, key: str) -> Any: ...

    def duplicate(self) -> "ApplicationState": ...


class StateContainer(ABC):
    """
    Storage plus the full operation set. Ownership is decided by the
    subclass through ``duplicate``. Equality compares content, ordering
    compares the number of entries only, and the hash combines the creation
    timestamp with the entry count. Two containers with equal content but
    different creation times are equal yet usually hash differently, so
    containers should not be used as set members or dict keys when equality
    matters.
    """

    def __init__(
        self,
        initial_state: Optional[Mapping[str, Any]] = None,
        *,
        defaults: Optional[DefaultRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._date_created = time.time()
        self._entries: StateMap = dict(initial_state or {})
        self.defaults = default_registry if defaults is None else defaults
        self.logger = logger or logging.getLogger(__name__)

    @property
    def date_created(self) -> float:
        return self._date_created

    @property
    def state(self) -> StateMap:
        """Shallow snapshot of the stored entries."""
        return dict(self._entries)

    # -- Writes --

    def set_state(self, value: Any, key: str, allow_override: bool = True) -> Any:
        """Store ``value`` under ``key``; returns the previous value or None.

        With ``allow_override=False`` an existing real value is kept. A key
        stored as ``None`` is always overwritten.
        """
        return operations.set_value(self._entries, value, key, allow_override, self.logger)

    def merge_state(self, state: Mapping[str, Any], allow_override: bool = True) -> StateMap:
        """Merge a mapping into the container; returns the entries as they were before."""
        return operations.merge(self._entries, state, allow_override, self.logger)

    def remove(self, key: str) -> Any:
        return operations.remove(self._entries, key, self.logger)

    # -- Reads --

    def lookup(self, key: str, default: Any = None, expected_type: Any = None) -> Any:
        """
        Return the value at ``key``. A missing key, a ``None`` value and a
        value that does not match ``expected_type`` all return ``default``.
        A non-None ``default`` without ``expected_type`` requests the
        default's own type.
        """
        return operations.lookup(self._entries, key, default, expected_type)

    def type_of(self, key: str) -> Optional[type]:
        return operations.type_of(self._entries, key)

    def filter_by_type(self, expected_type: Any) -> StateMap:
        return operations.filter_by_type(self._entries, expected_type)

    # -- Typed accessors --

    def get_optional(self, key: str, expected_type: Any = None) -> Any:
        return self.lookup(key, expected_type=expected_type)

    def get(self, key: str, expected_type: Any, default: Any = None) -> Any:
        """
        Return the value at ``key`` as ``expected_type``. When it is missing
        or mismatched, ``default`` is returned, or the registered default for
        ``expected_type`` when no default is given. An optional
        ``expected_type`` such as ``Optional[str]`` falls back to None.
        Raises NoDefaultForType when a fallback is needed and none exists.
        """
        value = self.lookup(key, expected_type=expected_type)
        if value is not None:
            return value
        if default is not None or operations.accepts_none(expected_type):
            return default
        factory = self.defaults.factory_for(expected_type)
        self.logger.debug("No %r value for %r, using type default", expected_type, key)
        return factory()

    def get_string(self, key: str, default: Optional[str] = None) -> str:
        return self.get(key, str, default)

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        return self.get(key, int, default)

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        return self.get(key, float, default)

    def get_bool(self, key: str, default: Optional[bool] = None) -> bool:
        return self.get(key, bool, default)

    def get_list(self, key: str, item_type: Any = None) -> List[Any]:
        return self.get(key, list if item_type is None else List[item_type])

    def get_tuple(self, key: str, item_type: Any = None) -> tuple:
        return self.get(key, tuple if item_type is None else Tuple[item_type, ...])

    def get_set(self, key: str, item_type: Any = None) -> Set[Any]:
        return self.get(key, set if item_type is None else Set[item_type])

    def get_dict(self, key: str, key_type: Any = None, value_type: Any = None) -> Dict[Any, Any]:
        if key_type is None and value_type is None:
            return self.get(key, dict)
        return self.get(key, Dict[key_type or Any, value_type or Any])

    # -- Protocols --

    @abstractmethod
    def duplicate(self) -> "StateContainer":
        """Return another handle; the subclass decides whether storage is shared."""

    def __copy__(self):
        return self.duplicate()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, StateContainer):
            return NotImplemented
        return operations.entries_equal(self._entries, other._entries)

    def __lt__(self, other):
        if not isinstance(other, StateContainer):
            return NotImplemented
        return len(self) < len(other)

    def __gt__(self, other):
        if not isinstance(other, StateContainer):
            return NotImplemented
        return len(self) > len(other)

    def __le__(self, other):
        if not isinstance(other, StateContainer):
            return NotImplemented
        return len(self) <= len(other)

    def __ge__(self, other):
        if not isinstance(other, StateContainer):
            return NotImplemented
        return len(self) >= len(other)

    def __hash__(self):
        return hash((self._date_created, len(self._entries)))

    def __repr__(self):
        return f"{self.__class__.__name__}({self._entries!r})"


class GlobalState(StateContainer):
    """
    Shared-ownership container. ``duplicate()``, ``copy.copy`` and
    ``copy.deepcopy`` all return a new handle over the same storage, with the
    same creation timestamp.

    Example:
        user = GlobalState({"name": "Mike Smith", "city": "Los Angeles"})
        current_user = user.duplicate()
        current_user.set_state("San Francisco", "city")
        user.get_string("city")  # "San Francisco"
    """

    def duplicate(self) -> "GlobalState":
        handle = self.__class__.__new__(self.__class__)
        handle.__dict__.update(self.__dict__)
        return handle

    def __deepcopy__(self, memo):
        return self.duplicate()


class LocalState(StateContainer):
    """
    Independent-ownership container. ``duplicate()``, ``copy.copy`` and
    ``copy.deepcopy`` all deep-copy the entries into a new container with its
    own creation timestamp; later writes to either side are not seen by the
    other.

    Example:
        user = LocalState({"name": "Mike Smith", "city": "Los Angeles"})
        user02 = user.duplicate()
        user02.set_state("San Francisco", "city")
        user.get_string("city")  # "Los Angeles"
    """

    def duplicate(self) -> "LocalState":
        return self.__deepcopy__({})

    def __deepcopy__(self, memo):
        return self.__class__(
            copy.deepcopy(self._entries, memo),
            defaults=self.defaults,
            logger=self.logger,
        )
