"""Current-line span lookup and deletion."""

from __future__ import annotations

from dataclasses import dataclass

from vim_overlay.host import DocumentSurface
from vim_overlay.runtime import telemetry


@dataclass(frozen=True, slots=True)
class LineSpan:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


def line_span(surface: DocumentSurface, position: int) -> LineSpan:
    start, end = surface.find_enclosing_block_range(position)
    return LineSpan(start=start, end=end)


def delete_current_line(surface: DocumentSurface) -> LineSpan:
    """Delete the innermost block around the cursor and scroll to it.

    ``BlockLookupError`` from the surface propagates unchanged.
    """

    position = surface.get_cursor_position()
    with telemetry.span(
        "lines::delete_current_line",
        component="actions",
        metadata={"position": position},
    ) as handle:
        span = line_span(surface, position)
        handle.add_metadata("span", (span.start, span.end))
        surface.delete_range(span.start, span.end)
        surface.scroll_into_view()
    return span


__all__ = ["LineSpan", "line_span", "delete_current_line"]
