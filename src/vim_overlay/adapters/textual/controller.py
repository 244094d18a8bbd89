"""Textual-facing controller relaying dispatcher events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from vim_overlay.keymaps import KeyStroke
from vim_overlay.modes import KeyDispatcher

_COMMAND_MODIFIERS = frozenset({"ctrl", "alt", "meta"})
_TEXTUAL_KEY_NAMES = {
    "escape": "Escape",
    "enter": "Enter",
    "backspace": "Backspace",
    "tab": "Tab",
}
_OBSERVED_EVENTS = (
    "mode.switch",
    "motion",
    "operator.armed",
    "operator.resolved",
    "line.delete",
    "input.blocked",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def textual_key_to_stroke(key: str, character: Optional[str] = None) -> KeyStroke:
    """Translate a Textual key name (``"ctrl+v"``, ``"full_stop"``) to a stroke."""

    *modifiers, name = key.split("+") if key != "+" else ["+"]
    if (
        character is not None
        and len(character) == 1
        and character.isprintable()
        and not _COMMAND_MODIFIERS.intersection(modifiers)
    ):
        return KeyStroke(character, tuple(modifiers), character)
    return KeyStroke(_TEXTUAL_KEY_NAMES.get(name, name or "+"), tuple(modifiers))


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_mode: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualOverlayController:
    """Relays a ``KeyDispatcher`` bus to Textual widgets until closed."""

    def __init__(self, dispatcher: KeyDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._subscriptions: List[Tuple[str, Callable[[object], None]]] = []
        self._subscribe_events()
        self.hooks.update_mode(dispatcher.mode.value)

    def close(self) -> None:
        bus = self.dispatcher.bus
        for event, callback in self._subscriptions:
            bus.unsubscribe(event, callback)
        self._subscriptions.clear()

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.bus
        for event in _OBSERVED_EVENTS:
            callback = partial(self._handle_event, event)
            bus.subscribe(event, callback)
            self._subscriptions.append((event, callback))

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "mode.switch" and isinstance(payload, dict):
            self.hooks.update_mode(str(payload["mode"]))
        elif name == "input.blocked":
            self.hooks.update_status("input_blocked")
        else:
            self.hooks.update_status(name)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        pending = self.dispatcher.debouncer.live_pending()
        return {
            "mode": self.dispatcher.mode.value,
            "cursor": self.dispatcher.surface.get_cursor_position(),
            "pending": pending.key if pending else None,
        }


__all__ = ["TextualOverlayController", "TextualUIHooks", "textual_key_to_stroke"]
