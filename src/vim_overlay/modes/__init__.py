"""Mode state, operator debouncing, and key dispatch."""

from .base_mode import KeyResult, Mode, ModeBus
from .state import ModeState, PendingOperator
from .debouncer import Clock, OperatorDebouncer, monotonic_ms
from .dispatcher import KeyDispatcher, OperatorAction, build_default_table

__all__ = [
    "KeyResult",
    "Mode",
    "ModeBus",
    "ModeState",
    "PendingOperator",
    "Clock",
    "OperatorDebouncer",
    "monotonic_ms",
    "KeyDispatcher",
    "OperatorAction",
    "build_default_table",
]
