"""Executable Textual app hosting the modal interpreter over a TextArea."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use vim_overlay.adapters.textual.app"
    ) from exc

from vim_overlay.host import InputInterceptor, InputRequest, KeyHandler
from vim_overlay.modes import KeyDispatcher
from vim_overlay.runtime import OverlayConfig, telemetry

from .controller import TextualOverlayController, TextualUIHooks, textual_key_to_stroke
from .surface import TextAreaSurface


class VimTextArea(TextArea):
    """TextArea exposing key handlers and input interceptors to the overlay."""

    def __init__(self, text: str = "", **kwargs: object) -> None:
        super().__init__(text, **kwargs)  # type: ignore[arg-type]
        self._key_handlers: List[KeyHandler] = []
        self._interceptors: List[InputInterceptor] = []

    def add_key_handler(self, handler: KeyHandler) -> None:
        self._key_handlers.append(handler)

    def remove_key_handler(self, handler: KeyHandler) -> None:
        if handler in self._key_handlers:
            self._key_handlers.remove(handler)

    def add_input_interceptor(self, interceptor: InputInterceptor) -> None:
        self._interceptors.append(interceptor)

    def remove_input_interceptor(self, interceptor: InputInterceptor) -> None:
        if interceptor in self._interceptors:
            self._interceptors.remove(interceptor)

    async def _on_key(self, event: events.Key) -> None:
        # Returning without prevent_default lets TextArea._on_key run next.
        stroke = textual_key_to_stroke(event.key, event.character)
        for handler in list(self._key_handlers):
            if handler(stroke):
                event.stop()
                event.prevent_default()
                return
        if event.is_printable and event.character is not None:
            if self._blocked(InputRequest(kind="text", text=event.character)):
                event.stop()
                event.prevent_default()

    async def _on_paste(self, event: events.Paste) -> None:
        if self._blocked(InputRequest(kind="paste", text=event.text)):
            event.stop()
            event.prevent_default()

    def _blocked(self, request: InputRequest) -> bool:
        return any(interceptor(request) for interceptor in list(self._interceptors))


class VimOverlayApp(App[None]):
    """Minimal Textual UI embedding the modal interpreter."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #editor {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", config: OverlayConfig | None = None) -> None:
        super().__init__()
        self._text = text
        self._config = config or OverlayConfig.from_env()
        self._mode = self._config.initial_mode
        self._status = ""
        self.dispatcher: KeyDispatcher | None = None
        self.controller: TextualOverlayController | None = None
        self.logger = telemetry.get_logger("vim_overlay.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield VimTextArea(self._text, id="editor")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", VimTextArea)
        surface = TextAreaSurface(area)
        self.dispatcher = KeyDispatcher(surface, pipeline=area, config=self._config)
        hooks = TextualUIHooks(
            update_mode=self._update_mode,
            update_status=self._update_status,
            log=self.logger.debug,
        )
        self.controller = TextualOverlayController(self.dispatcher, hooks)
        self.dispatcher.attach()
        area.focus()

    def on_unmount(self) -> None:
        if self.controller:
            self.controller.close()
        if self.dispatcher:
            self.dispatcher.detach()

    def _update_mode(self, mode: str) -> None:
        self._mode = mode
        self._render_status()

    def _update_status(self, status: str) -> None:
        self._status = status
        self._render_status()

    def _render_status(self) -> None:
        if not self.is_mounted:
            return
        line = f"-- {self._mode.upper()} --"
        if self._status:
            line = f"{line}  {self._status}"
        self.query_one("#status-line", Static).update(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the modal Normal/Insert editing demo."
    )
    parser.add_argument("--file", default=None, help="Text file to load into the editor")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Operator chord window in milliseconds (default: 500)",
    )
    parser.add_argument(
        "--initial-mode",
        choices=("normal", "insert"),
        default=None,
        help="Mode the editor starts in (default: insert)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    overrides: dict[str, object] = {}
    if args.timeout_ms is not None:
        overrides["operator_timeout_ms"] = args.timeout_ms
    if args.initial_mode is not None:
        overrides["initial_mode"] = args.initial_mode
    config = OverlayConfig.from_env(**overrides)
    text = Path(args.file).read_text(encoding="utf-8") if args.file else ""
    VimOverlayApp(text=text, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
