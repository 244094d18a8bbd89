"""Document surface backed by a Textual ``TextArea``.

Coordinates are visual cells of the wrapped document: x is the cell offset
within a visual row and y is the visual row, so the line height hint is one
cell and soft-wrapped continuation rows count as lines.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Tuple

from textual.geometry import Offset

from vim_overlay.host import BlockLookupError, Coordinates, is_paste_shortcut
from vim_overlay.keymaps import KeyStroke

if TYPE_CHECKING:  # pragma: no cover
    from textual.widgets import TextArea

Location = Tuple[int, int]


class TextAreaSurface:
    def __init__(self, area: "TextArea") -> None:
        self.area = area

    def get_cursor_position(self) -> int:
        return self.area.document.get_index_from_location(self.area.cursor_location)

    def set_cursor_position(self, offset: int) -> None:
        self.area.move_cursor(self._location(offset))

    def get_document_length(self) -> int:
        return len(self.area.text)

    def get_text_range(self, start: int, end: int) -> str:
        start, end = sorted((start, end))
        return self.area.get_text_range(self._location(start), self._location(end))

    def map_position_to_coordinates(self, offset: int) -> Optional[Coordinates]:
        x, y = self.area.wrapped_document.location_to_offset(self._location(offset))
        return (float(x), float(y))

    def map_coordinates_to_position(self, x: float, y: float) -> Optional[int]:
        wrapped = self.area.wrapped_document
        row = math.floor(y)
        if row < 0 or row >= wrapped.height:
            return None
        location = wrapped.offset_to_location(Offset(max(0, int(x)), row))
        return self.area.document.get_index_from_location(location)

    def get_line_height_hint(self) -> Optional[float]:
        return 1.0

    def find_enclosing_block_range(self, offset: int) -> Tuple[int, int]:
        if offset < 0 or offset > self.get_document_length():
            raise BlockLookupError("Offset outside the document", offset=offset)
        document = self.area.document
        row, _ = document.get_location_from_index(offset)
        start = document.get_index_from_location((row, 0))
        end = start + len(document.get_line(row))
        newline = len(document.newline)
        if row < document.line_count - 1:
            end += newline
        elif row > 0:
            start -= newline
        return (start, end)

    def delete_range(self, start: int, end: int) -> None:
        start, end = sorted((start, end))
        self.area.delete(self._location(start), self._location(end))

    def insert_text(self, text: str) -> None:
        self.area.insert(text)

    def scroll_into_view(self) -> None:
        self.area.scroll_cursor_visible()

    def is_paste_requested(self, key: KeyStroke) -> bool:
        return is_paste_shortcut(key)

    def _location(self, offset: int) -> Location:
        offset = max(0, min(offset, self.get_document_length()))
        return self.area.document.get_location_from_index(offset)


__all__ = ["TextAreaSurface"]
