"""Key dispatcher: the Normal/Insert interpreter attached to one surface."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from vim_overlay.actions import apply_motion, delete_current_line
from vim_overlay.host import DocumentSurface, EventPipeline, InputRequest
from vim_overlay.keymaps import (
    Command,
    DispatchTable,
    KeyStroke,
    ModeSwitch,
    Motion,
    OperatorArm,
    Suppress,
    load_default_keymaps,
)
from vim_overlay.runtime import OverlayConfig, telemetry

from .base_mode import KeyResult, Mode, ModeBus
from .debouncer import Clock, OperatorDebouncer, monotonic_ms
from .state import ModeState

OperatorAction = Callable[[DocumentSurface], object]


def build_default_table(config: OverlayConfig) -> DispatchTable:
    table = DispatchTable(
        suppressed_characters=config.suppressed_characters,
        suppress_in=Mode.NORMAL.value,
        logger_name="vim_overlay.keymaps",
    )
    load_default_keymaps(table)
    return table


class KeyDispatcher:
    """Mode-gates keystrokes and routes them to motions, operators, or the host.

    One dispatcher owns one ``ModeState``; nothing is shared between
    dispatchers attached to different surfaces.
    """

    def __init__(
        self,
        surface: DocumentSurface,
        *,
        pipeline: Optional[EventPipeline] = None,
        config: Optional[OverlayConfig] = None,
        table: Optional[DispatchTable] = None,
        bus: Optional[ModeBus] = None,
        clock: Clock = monotonic_ms,
    ) -> None:
        self.surface = surface
        self.config = config or OverlayConfig()
        self.pipeline = pipeline
        if self.pipeline is None and hasattr(surface, "add_key_handler"):
            self.pipeline = surface  # type: ignore[assignment]
        self.table = table or build_default_table(self.config)
        self.bus = bus or ModeBus()
        self.state = ModeState(Mode(self.config.initial_mode))
        self.debouncer = OperatorDebouncer(
            self.state, window_ms=self.config.operator_timeout_ms, clock=clock
        )
        self.logger = telemetry.get_logger("vim_overlay.modes.dispatcher")
        self._operators: Dict[str, OperatorAction] = {"d": delete_current_line}
        self._attached = False
        self._closed = False

    # -- host-facing commands ---------------------------------------------

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def enter_normal_mode(self) -> bool:
        previous = self.state.enter_normal(self.surface)
        self._announce_switch(previous)
        return True

    def enter_insert_mode(self) -> bool:
        previous = self.state.enter_insert()
        self._announce_switch(previous)
        return True

    def register_operator(self, key: str, action: OperatorAction) -> None:
        """Action fired when ``key`` is pressed twice within the window."""

        self._operators[key] = action

    # -- pipeline lifecycle -----------------------------------------------

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> "KeyDispatcher":
        if self.pipeline is None:
            raise RuntimeError("KeyDispatcher has no event pipeline to attach to")
        if self._attached:
            return self
        self.pipeline.add_key_handler(self._on_key)
        self.pipeline.add_input_interceptor(self._on_input)
        self._attached = True
        self._closed = False
        telemetry.record_event(
            "dispatcher.attach", level="debug", data={"mode": self.mode.value}
        )
        return self

    def detach(self) -> None:
        """Unregister handlers and discard mode/pending-operator state."""

        if self._attached and self.pipeline is not None:
            self.pipeline.remove_key_handler(self._on_key)
            self.pipeline.remove_input_interceptor(self._on_input)
        self._attached = False
        self._closed = True
        self.state.reset()
        telemetry.record_event("dispatcher.detach", level="debug")

    def __enter__(self) -> "KeyDispatcher":
        return self.attach()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.detach()
        return False

    # -- dispatch ---------------------------------------------------------

    def handle_key(self, key: KeyStroke) -> KeyResult:
        if self._closed:
            return KeyResult(consumed=False, status="detached")

        mode = self.state.mode
        with telemetry.span(
            f"dispatch::{mode.value}",
            component="dispatch",
            metadata={"key": key.token, "mode": mode.value},
        ) as handle:
            if mode is Mode.NORMAL and self.surface.is_paste_requested(key):
                self.bus.emit("input.blocked", {"kind": "paste", "key": key.token})
                result = KeyResult(consumed=True, status="paste_blocked")
            else:
                command = self.table.resolve(mode.value, key)
                result = self._execute(command)
            handle.add_metadata("status", result.status)
        return result

    def intercept_input(self, request: InputRequest) -> bool:
        """Returns ``True`` when the host must drop the insertion."""

        if self._closed or self.state.mode is not Mode.NORMAL:
            return False
        self.bus.emit("input.blocked", {"kind": request.kind, "text": request.text})
        return True

    def _on_key(self, key: KeyStroke) -> bool:
        return self.handle_key(key).consumed

    def _on_input(self, request: InputRequest) -> bool:
        return self.intercept_input(request)

    def _execute(self, command: Command) -> KeyResult:
        if isinstance(command, ModeSwitch):
            if command.target == Mode.NORMAL.value:
                self.enter_normal_mode()
            else:
                self.enter_insert_mode()
            return KeyResult(
                consumed=True,
                status="mode_switch",
                switch_to=command.target,
                message=f"enter_{command.target}",
            )

        if isinstance(command, Motion):
            return self._execute_motion(command)

        if isinstance(command, OperatorArm):
            return self._execute_operator(command)

        if isinstance(command, Suppress):
            return KeyResult(consumed=True, status="suppressed")

        return KeyResult(consumed=False, status="passthrough")

    def _execute_motion(self, motion: Motion) -> KeyResult:
        target = apply_motion(
            self.surface,
            motion.unit,
            motion.direction,
            fallback_line_height=self.config.fallback_line_height,
        )
        if target is None:
            return KeyResult(consumed=True, status="motion_unavailable")
        self.bus.emit(
            "motion",
            {"unit": motion.unit, "direction": motion.direction, "position": target},
        )
        return KeyResult(consumed=True, status="motion")

    def _execute_operator(self, command: OperatorArm) -> KeyResult:
        if not self.debouncer.press(command.key):
            self.bus.emit("operator.armed", self.state.pending)
            return KeyResult(
                consumed=True, status="operator_pending", message=command.key
            )

        self.bus.emit("operator.resolved", command.key)
        action = self._operators.get(command.key)
        if action is None:
            self.logger.warning("no action registered for operator %r", command.key)
            return KeyResult(consumed=True, status="noop", message=command.key)

        outcome = action(self.surface)
        if action is delete_current_line:
            self.bus.emit("line.delete", outcome)
            return KeyResult(consumed=True, status="line_delete", message="dd")
        return KeyResult(consumed=True, status="operator", message=command.key * 2)

    def _announce_switch(self, previous: Mode) -> None:
        payload = {"mode": self.state.mode.value, "previous": previous.value}
        self.bus.emit("mode.switch", payload)
        telemetry.record_event("mode.switch", data=payload)


__all__ = ["KeyDispatcher", "OperatorAction", "build_default_table"]
