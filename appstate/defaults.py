"""Type-to-default bindings used by the typed accessors.

Only the basic text, numeric, boolean and collection types ship with a
default. Anything else has to be registered before a typed accessor can fall
back for it.
"""

from typing import Any, Callable, Dict, Optional, get_origin


class NoDefaultForType(LookupError):
    """No default value is registered for the requested type"""
    pass


BUILTIN_DEFAULTS: Dict[type, Callable[[], Any]] = {
    str: str,
    int: int,
    float: float,
    bool: bool,
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    dict: dict,
}


class DefaultRegistry:
    """
    Maps a type to a zero-argument factory producing its default value.
    Factories are called on every fallback so mutable defaults are never shared.
    Parameterized generics resolve through their origin: ``list[str]`` uses
    the ``list`` factory.
    """

    def __init__(self, factories: Optional[Dict[type, Callable[[], Any]]] = None):
        self._factories: Dict[Any, Callable[[], Any]] = dict(factories or {})

    def register(self, expected_type: Any, factory: Callable[[], Any]) -> None:
        if not callable(factory):
            raise TypeError(f"Default factory for {expected_type!r} must be callable")
        self._factories[expected_type] = factory

    def unregister(self, expected_type: Any) -> None:
        self._factories.pop(expected_type, None)

    def factory_for(self, expected_type: Any) -> Callable[[], Any]:
        factory = self._factories.get(expected_type)
        if factory is None:
            factory = self._factories.get(get_origin(expected_type))
        if factory is None:
            raise NoDefaultForType(expected_type)
        return factory

    def default_for(self, expected_type: Any) -> Any:
        return self.factory_for(expected_type)()

    def copy(self) -> "DefaultRegistry":
        return DefaultRegistry(self._factories)

    def __contains__(self, expected_type) -> bool:
        try:
            self.factory_for(expected_type)
        except NoDefaultForType:
            return False
        return True

    def __len__(self) -> int:
        return len(self._factories)


# Shared by every container that is not given its own registry.
default_registry = DefaultRegistry(BUILTIN_DEFAULTS)
