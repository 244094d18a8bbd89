"""Boundary types describing the host editing surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol, Tuple

from vim_overlay.keymaps import KeyStroke

Coordinates = Tuple[float, float]
KeyHandler = Callable[[KeyStroke], bool]


@dataclass(frozen=True, slots=True)
class InputRequest:
    """Text the host is about to insert outside of key dispatch."""

    kind: Literal["text", "paste"]
    text: str


InputInterceptor = Callable[[InputRequest], bool]


class DocumentSurface(Protocol):
    """Capabilities the interpreter consumes from a host document."""

    def get_cursor_position(self) -> int:
        ...

    def set_cursor_position(self, offset: int) -> None:
        ...

    def get_document_length(self) -> int:
        ...

    def get_text_range(self, start: int, end: int) -> str:
        ...

    def map_position_to_coordinates(self, offset: int) -> Optional[Coordinates]:
        """Visual (x, y) of ``offset``, or ``None`` when layout is unavailable."""
        ...

    def map_coordinates_to_position(self, x: float, y: float) -> Optional[int]:
        ...

    def get_line_height_hint(self) -> Optional[float]:
        ...

    def find_enclosing_block_range(self, offset: int) -> Tuple[int, int]:
        """Half-open range occupied by the innermost block around ``offset``."""
        ...

    def delete_range(self, start: int, end: int) -> None:
        ...

    def insert_text(self, text: str) -> None:
        ...

    def scroll_into_view(self) -> None:
        ...

    def is_paste_requested(self, key: KeyStroke) -> bool:
        ...


class EventPipeline(Protocol):
    """Registration points for key handlers and input interceptors.

    Key handlers return ``True`` when they consumed the key; interceptors
    return ``True`` to block the pending insertion.
    """

    def add_key_handler(self, handler: KeyHandler) -> None:
        ...

    def remove_key_handler(self, handler: KeyHandler) -> None:
        ...

    def add_input_interceptor(self, interceptor: InputInterceptor) -> None:
        ...

    def remove_input_interceptor(self, interceptor: InputInterceptor) -> None:
        ...


class SurfaceError(RuntimeError):
    """Raised when a host surface cannot honor a request."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class BlockLookupError(SurfaceError):
    """Raised when no enclosing block can be found for a position."""


def is_paste_shortcut(key: KeyStroke) -> bool:
    """Platform paste chord: ctrl+v or meta+v (cmd on macOS)."""

    return key.key.lower() == "v" and bool({"ctrl", "meta"} & set(key.modifiers))


__all__ = [
    "Coordinates",
    "DocumentSurface",
    "EventPipeline",
    "InputInterceptor",
    "InputRequest",
    "KeyHandler",
    "SurfaceError",
    "BlockLookupError",
    "is_paste_shortcut",
]
