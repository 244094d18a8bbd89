"""Built-in bindings seeding the Normal/Insert dispatch table."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import (
    ANY_MODE,
    Binding,
    KeyStroke,
    ModeSwitch,
    Motion,
    OperatorArm,
)
from .table import DispatchTable

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="any.escape",
        mode=ANY_MODE,
        key=KeyStroke("Escape"),
        command=ModeSwitch("normal"),
        description="Enter normal mode",
    ),
    Binding(
        id="normal.enter_insert",
        mode="normal",
        key=KeyStroke("i"),
        command=ModeSwitch("insert"),
        description="Enter insert mode",
    ),
    Binding(
        id="normal.char_left",
        mode="normal",
        key=KeyStroke("h"),
        command=Motion("char", -1),
        description="Move cursor left",
    ),
    Binding(
        id="normal.char_right",
        mode="normal",
        key=KeyStroke("l"),
        command=Motion("char", 1),
        description="Move cursor right",
    ),
    Binding(
        id="normal.line_down",
        mode="normal",
        key=KeyStroke("j"),
        command=Motion("line", 1),
        description="Move cursor one visual line down",
    ),
    Binding(
        id="normal.line_up",
        mode="normal",
        key=KeyStroke("k"),
        command=Motion("line", -1),
        description="Move cursor one visual line up",
    ),
    Binding(
        id="normal.word_back",
        mode="normal",
        key=KeyStroke("b"),
        command=Motion("word", -1),
        description="Move to the start of the previous word",
    ),
    Binding(
        id="normal.delete_operator",
        mode="normal",
        key=KeyStroke("d"),
        command=OperatorArm("d"),
        description="Delete operator (dd deletes the current line)",
    ),
)


def load_default_keymaps(
    table: DispatchTable,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in bindings, then any extras."""

    excluded = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        table.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            table.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_BINDINGS"]
