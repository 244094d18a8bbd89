from __future__ import annotations

from typing import List

import pytest

from vim_overlay.adapters.textual import (
    TextualOverlayController,
    TextualUIHooks,
    textual_key_to_stroke,
)
from vim_overlay.host import MemorySurface
from vim_overlay.keymaps import KeyStroke
from vim_overlay.modes import KeyDispatcher


def make_controller(
    surface: MemorySurface,
) -> tuple[TextualOverlayController, List[str], List[str], List[str]]:
    modes: List[str] = []
    statuses: List[str] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_mode=modes.append,
        update_status=statuses.append,
        log=logs.append,
    )
    controller = TextualOverlayController(KeyDispatcher(surface).attach(), hooks)
    return controller, modes, statuses, logs


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("escape", None, KeyStroke("Escape")),
        ("enter", "\r", KeyStroke("Enter")),
        ("j", "j", KeyStroke("j", text="j")),
        ("full_stop", ".", KeyStroke(".", text=".")),
        ("shift+a", "A", KeyStroke("A", text="A")),
        ("ctrl+v", "\x16", KeyStroke("v", ("ctrl",))),
        ("meta+v", None, KeyStroke("v", ("meta",))),
    ],
)
def test_textual_key_to_stroke(
    key: str, character: str | None, expected: KeyStroke
) -> None:
    assert textual_key_to_stroke(key, character) == expected


def test_controller_reports_initial_mode_and_switches() -> None:
    surface = MemorySurface("hello", cursor=3)
    _, modes, _, logs = make_controller(surface)

    assert surface.press("Escape") is True

    assert modes == ["insert", "normal"]
    assert surface.get_cursor_position() == 2
    assert any("event='mode.switch'" in line for line in logs)


def test_controller_relays_dd_events() -> None:
    surface = MemorySurface.from_blocks("Line 1", "Line 2", cursor=2)
    _, _, statuses, _ = make_controller(surface)

    surface.press("Escape")
    surface.press("d")
    surface.press("d")

    assert surface.text == "Line 2"
    assert statuses == ["operator.armed", "operator.resolved", "line.delete"]


def test_controller_stays_quiet_for_insert_typing() -> None:
    surface = MemorySurface("", cursor=0)
    _, _, statuses, logs = make_controller(surface)

    surface.press("x")

    assert surface.text == "x"
    assert statuses == []
    assert logs == []


def test_controller_reports_blocked_input() -> None:
    surface = MemorySurface("ab", cursor=1)
    controller, _, statuses, _ = make_controller(surface)

    controller.dispatcher.enter_normal_mode()

    assert surface.request_paste("xyz") is False
    assert statuses[-1] == "input_blocked"


def test_close_unsubscribes_from_bus() -> None:
    surface = MemorySurface("abc", cursor=2)
    controller, modes, statuses, _ = make_controller(surface)

    controller.close()
    surface.press("Escape")
    surface.press("h")

    assert modes == ["insert"]
    assert statuses == []
    assert surface.get_cursor_position() == 0
