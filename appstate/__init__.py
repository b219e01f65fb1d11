"""
AppState: dynamically keyed state containers with shared or independent ownership.

Keys are text, values are anything (or None). Reads never raise: missing keys,
None values and type mismatches all read back as absent.
"""

from .defaults import BUILTIN_DEFAULTS, DefaultRegistry, NoDefaultForType, default_registry
from .operations import StateMap, matches_type
from .state import ApplicationState, GlobalState, LocalState, StateContainer

__version__ = "0.1.0"
__all__ = [
    "ApplicationState",
    "StateContainer",
    "GlobalState",
    "LocalState",
    "StateMap",
    "matches_type",
    "DefaultRegistry",
    "NoDefaultForType",
    "BUILTIN_DEFAULTS",
    "default_registry",
]
