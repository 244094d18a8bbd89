"""In-memory document surface with a minimal key/input pipeline.

Blocks are ``\\n``-separated lines of one linear string. Layout is a
monospace grid: column ``c`` of row ``r`` sits at ``(c * char_width,
r * line_height)``.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from vim_overlay.keymaps import KeyStroke
from vim_overlay.runtime import telemetry
from vim_overlay.runtime.config import DEFAULT_LINE_HEIGHT

from .protocol import (
    BlockLookupError,
    Coordinates,
    InputInterceptor,
    InputRequest,
    KeyHandler,
    is_paste_shortcut,
)

Location = Tuple[int, int]  # (row, column)


class MemorySurface:
    def __init__(
        self,
        text: str = "",
        *,
        cursor: int = 0,
        line_height: Optional[float] = DEFAULT_LINE_HEIGHT,
        char_width: float = 8.0,
        layout: bool = True,
        clipboard: str = "",
        name: str = "memory",
    ) -> None:
        self.name = name
        self._text = text
        self._cursor = self._clamp(cursor)
        self.line_height = line_height
        self.char_width = char_width
        self.layout = layout
        self.clipboard = clipboard
        self.version = 0
        self.scroll_requests = 0
        self._key_handlers: List[KeyHandler] = []
        self._interceptors: List[InputInterceptor] = []
        self.logger = telemetry.get_logger("vim_overlay.host.memory")

    @classmethod
    def from_blocks(cls, *blocks: str, **kwargs: object) -> "MemorySurface":
        return cls("\n".join(blocks), **kwargs)  # type: ignore[arg-type]

    @property
    def text(self) -> str:
        return self._text

    @property
    def blocks(self) -> Sequence[str]:
        return tuple(self._text.split("\n"))

    # -- DocumentSurface -------------------------------------------------

    def get_cursor_position(self) -> int:
        return self._cursor

    def set_cursor_position(self, offset: int) -> None:
        self._cursor = self._clamp(offset)

    def get_document_length(self) -> int:
        return len(self._text)

    def get_text_range(self, start: int, end: int) -> str:
        start, end = sorted((self._clamp(start), self._clamp(end)))
        return self._text[start:end]

    def map_position_to_coordinates(self, offset: int) -> Optional[Coordinates]:
        if not self.layout:
            return None
        row, col = self._location(self._clamp(offset))
        return (col * self.char_width, row * self._row_height)

    def map_coordinates_to_position(self, x: float, y: float) -> Optional[int]:
        if not self.layout:
            return None
        lines = self.blocks
        row = math.floor(y / self._row_height)
        if row < 0 or row >= len(lines):
            return None
        col = max(0, min(math.floor(x / self.char_width), len(lines[row])))
        return self._offset((row, col))

    def get_line_height_hint(self) -> Optional[float]:
        return self.line_height

    def find_enclosing_block_range(self, offset: int) -> Tuple[int, int]:
        if offset < 0 or offset > len(self._text):
            raise BlockLookupError("Offset outside the document", offset=offset)
        lines = self.blocks
        row, _ = self._location(offset)
        start = self._offset((row, 0))
        end = start + len(lines[row])
        if row < len(lines) - 1:
            end += 1
        elif row > 0:
            start -= 1
        return (start, end)

    def delete_range(self, start: int, end: int) -> None:
        start, end = sorted((self._clamp(start), self._clamp(end)))
        with telemetry.span(
            "surface::delete_range",
            component="host",
            metadata={"surface": self.name, "start": start, "end": end},
        ):
            self._text = self._text[:start] + self._text[end:]
            if self._cursor >= end:
                self._cursor -= end - start
            elif self._cursor > start:
                self._cursor = start
            self.version += 1

    def insert_text(self, text: str) -> None:
        position = self._cursor
        self._text = self._text[:position] + text + self._text[position:]
        self._cursor = position + len(text)
        self.version += 1

    def scroll_into_view(self) -> None:
        self.scroll_requests += 1

    def is_paste_requested(self, key: KeyStroke) -> bool:
        return is_paste_shortcut(key)

    # -- EventPipeline ---------------------------------------------------

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

    @property
    def handler_count(self) -> int:
        return len(self._key_handlers) + len(self._interceptors)

    # -- host simulation -------------------------------------------------

    def press(
        self,
        key: str | KeyStroke,
        *,
        modifiers: Iterable[str] = (),
        text: Optional[str] = None,
    ) -> bool:
        """Deliver a keystroke; returns ``True`` when a handler consumed it.

        Unconsumed keys get the host default: the paste shortcut pastes the
        clipboard, printable characters go through ``request_text_input``,
        ``Backspace`` deletes backwards and ``Enter`` splits the block.
        """

        if isinstance(key, KeyStroke):
            stroke = key
        else:
            stroke = KeyStroke.parse(key)
            if modifiers or text is not None:
                stroke = KeyStroke(
                    stroke.key, stroke.modifiers + tuple(modifiers), text
                )

        for handler in list(self._key_handlers):
            if handler(stroke):
                return True

        if self.is_paste_requested(stroke):
            self.request_paste(self.clipboard)
        elif stroke.character is not None:
            self.request_text_input(stroke.character)
        elif stroke.key == "Backspace" and self._cursor > 0:
            self.delete_range(self._cursor - 1, self._cursor)
        elif stroke.key == "Enter":
            self.insert_text("\n")
        return False

    def press_sequence(self, keys: str) -> None:
        for char in keys:
            self.press(char)

    def request_text_input(self, text: str) -> bool:
        """Programmatic insertion at the cursor, subject to interceptors."""

        return self._request(InputRequest(kind="text", text=text))

    def request_paste(self, text: str) -> bool:
        return self._request(InputRequest(kind="paste", text=text))

    def _request(self, request: InputRequest) -> bool:
        for interceptor in list(self._interceptors):
            if interceptor(request):
                self.logger.debug(
                    "input blocked kind=%s length=%d", request.kind, len(request.text)
                )
                return False
        if request.text:
            self.insert_text(request.text)
        return True

    # -- helpers ---------------------------------------------------------

    @property
    def _row_height(self) -> float:
        return self.line_height or DEFAULT_LINE_HEIGHT

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def _location(self, offset: int) -> Location:
        lines = self.blocks
        running = 0
        for row, line in enumerate(lines):
            line_len = len(line)
            if offset <= running + line_len:
                return (row, offset - running)
            running += line_len + 1  # newline
        return (len(lines) - 1, len(lines[-1]))

    def _offset(self, location: Location) -> int:
        lines = self.blocks
        row, col = location
        offset = 0
        for i in range(row):
            offset += len(lines[i]) + 1  # newline
        return offset + col


__all__ = ["MemorySurface"]
