"""Motion and line-editing verbs used by Normal mode."""

from .lines import LineSpan, delete_current_line, line_span
from .motions import (
    apply_motion,
    line_target,
    move_by_char,
    previous_word_start,
    surface_char_reader,
)

__all__ = [
    "LineSpan",
    "delete_current_line",
    "line_span",
    "apply_motion",
    "line_target",
    "move_by_char",
    "previous_word_start",
    "surface_char_reader",
]
