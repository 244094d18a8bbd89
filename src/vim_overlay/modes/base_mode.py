"""Mode enum, dispatch results, and the event bus shared by interpreters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class Mode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"


@dataclass(slots=True)
class KeyResult:
    """Result returned from ``KeyDispatcher.handle_key``.

    ``consumed`` keys suppress the host default even when nothing changed.
    """

    consumed: bool
    status: str = "ok"
    switch_to: Optional[str] = None
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting hosts observe interpreter signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = ["Mode", "KeyResult", "ModeBus"]
