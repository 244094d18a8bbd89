"""Keystroke model, tagged commands, and the default dispatch table."""

from .models import (
    ANY_MODE,
    Binding,
    Command,
    KeyStroke,
    ModeSwitch,
    Motion,
    OperatorArm,
    Passthrough,
    Suppress,
)
from .table import DispatchTable, KeymapConflictError, TableStats
from .defaults import DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ANY_MODE",
    "Binding",
    "Command",
    "KeyStroke",
    "ModeSwitch",
    "Motion",
    "OperatorArm",
    "Passthrough",
    "Suppress",
    "DispatchTable",
    "KeymapConflictError",
    "TableStats",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]
