"""Cursor motions computed from a position and the surface contents."""

from __future__ import annotations

from typing import Callable, Optional

from vim_overlay.host import DocumentSurface

CharReader = Callable[[int], str]


def _is_space(char: str) -> bool:
    return char.isspace()


def move_by_char(position: int, delta: int, length: int) -> int:
    return max(0, min(length, position + delta))


def previous_word_start(position: int, char_at: CharReader) -> int:
    """Start of the previous word; consecutive whitespace is one separator.

    ``char_at(p)`` returns the single character at ``p``. An empty read counts
    as a word character.
    """

    while position > 0 and _is_space(char_at(position - 1)):
        position -= 1
    while position > 0 and not _is_space(char_at(position - 1)):
        position -= 1
    return position


def line_target(
    surface: DocumentSurface,
    position: int,
    direction: int,
    *,
    fallback_line_height: float,
) -> Optional[int]:
    """Position one visual line above/below, or ``None`` when unknown."""

    coords = surface.map_position_to_coordinates(position)
    if coords is None:
        return None
    x, y = coords
    line_height = surface.get_line_height_hint() or fallback_line_height
    return surface.map_coordinates_to_position(x, y + direction * line_height)


def surface_char_reader(surface: DocumentSurface) -> CharReader:
    return lambda offset: surface.get_text_range(offset, offset + 1)


def apply_motion(
    surface: DocumentSurface,
    unit: str,
    direction: int,
    *,
    fallback_line_height: float,
) -> Optional[int]:
    """Move the surface cursor; returns the new position or ``None`` if unmoved."""

    position = surface.get_cursor_position()
    target: Optional[int]
    if unit == "char":
        target = move_by_char(position, direction, surface.get_document_length())
    elif unit == "line":
        target = line_target(
            surface, position, direction, fallback_line_height=fallback_line_height
        )
    elif unit == "word":
        target = previous_word_start(position, surface_char_reader(surface))
    else:
        raise ValueError(f"Unknown motion unit '{unit}'")

    if target is None:
        return None
    surface.set_cursor_position(target)
    return target


__all__ = [
    "move_by_char",
    "previous_word_start",
    "line_target",
    "surface_char_reader",
    "apply_motion",
]
