"""Two-key operator chords resolved with lazy, timestamp-based expiry."""

from __future__ import annotations

import time
from typing import Callable, Optional

from vim_overlay.runtime import telemetry
from vim_overlay.runtime.config import DEFAULT_OPERATOR_TIMEOUT_MS

from .state import ModeState, PendingOperator

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class OperatorDebouncer:
    """Arms a pending operator on the first key and fires on a timely repeat.

    There is no timer: expiry is only evaluated when the next operator key
    arrives, and an expired record is simply overwritten.
    """

    def __init__(
        self,
        state: ModeState,
        *,
        window_ms: int = DEFAULT_OPERATOR_TIMEOUT_MS,
        clock: Clock = monotonic_ms,
    ) -> None:
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self.state = state
        self.window_ms = window_ms
        self._clock = clock
        self.logger = telemetry.get_logger("vim_overlay.modes.debouncer")

    def press(self, key: str) -> bool:
        """Returns ``True`` when ``key`` completes the pending chord."""

        now = self._clock()
        pending = self.state.pending
        if pending is not None and pending.key == key and pending.is_live(now):
            self.state.pending = None
            return True

        if pending is not None:
            self.logger.debug(
                "replacing stale operator key=%s expired=%s",
                pending.key,
                not pending.is_live(now),
            )
        self.state.pending = PendingOperator(
            key=key, expires_at_ms=now + self.window_ms
        )
        return False

    def live_pending(self) -> Optional[PendingOperator]:
        pending = self.state.pending
        if pending is None or not pending.is_live(self._clock()):
            return None
        return pending


__all__ = ["Clock", "OperatorDebouncer", "monotonic_ms"]
