"""Per-interpreter mode and pending-operator state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vim_overlay.host import DocumentSurface

from .base_mode import Mode


@dataclass(frozen=True, slots=True)
class PendingOperator:
    key: str
    expires_at_ms: float

    def is_live(self, now_ms: float) -> bool:
        return now_ms <= self.expires_at_ms


class ModeState:
    """Current mode plus at most one pending operator.

    Any transition clears the pending operator so a chord started before a
    Normal -> Insert -> Normal round-trip can never complete afterwards.
    """

    def __init__(self, initial: Mode = Mode.INSERT) -> None:
        self.initial = initial
        self.mode = initial
        self.pending: Optional[PendingOperator] = None

    @property
    def is_normal(self) -> bool:
        return self.mode is Mode.NORMAL

    def enter_normal(self, surface: DocumentSurface) -> Mode:
        """Switch to Normal and step the cursor back one position."""

        previous = self._switch(Mode.NORMAL)
        position = surface.get_cursor_position()
        surface.set_cursor_position(max(0, position - 1))
        return previous

    def enter_insert(self) -> Mode:
        return self._switch(Mode.INSERT)

    def reset(self) -> None:
        self.mode = self.initial
        self.pending = None

    def _switch(self, target: Mode) -> Mode:
        previous = self.mode
        self.mode = target
        self.pending = None
        return previous


__all__ = ["PendingOperator", "ModeState"]
