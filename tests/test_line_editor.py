import pytest

from vim_overlay.actions import LineSpan, delete_current_line, line_span
from vim_overlay.host import BlockLookupError, MemorySurface, SurfaceError


def test_line_span_includes_following_separator() -> None:
    surface = MemorySurface.from_blocks("Line 1", "Line 2", "Line 3")

    span = line_span(surface, 2)

    assert span == LineSpan(0, 7)
    assert len(span) == 7


def test_line_span_of_last_block_takes_preceding_separator() -> None:
    surface = MemorySurface.from_blocks("Line 1", "Line 2")

    assert line_span(surface, 10) == LineSpan(6, 13)


def test_line_span_of_single_block_is_whole_document() -> None:
    surface = MemorySurface("only")

    assert line_span(surface, 4) == LineSpan(0, 4)


def test_delete_current_line_removes_first_block() -> None:
    surface = MemorySurface.from_blocks("Line 1", "Line 2", cursor=3)

    deleted = delete_current_line(surface)

    assert deleted == LineSpan(0, 7)
    assert surface.text == "Line 2"
    assert surface.get_cursor_position() == 0
    assert surface.scroll_requests == 1


def test_delete_current_line_removes_middle_block() -> None:
    surface = MemorySurface.from_blocks("a", "b", "c", cursor=2)

    delete_current_line(surface)

    assert surface.blocks == ("a", "c")
    assert surface.get_cursor_position() == 2


def test_delete_current_line_removes_last_block() -> None:
    surface = MemorySurface.from_blocks("a", "b", cursor=3)

    delete_current_line(surface)

    assert surface.text == "a"
    assert surface.get_cursor_position() == 1


class _BrokenSurface(MemorySurface):
    def find_enclosing_block_range(self, offset: int):
        raise BlockLookupError("no block", offset=offset)


def test_block_lookup_failure_propagates() -> None:
    surface = _BrokenSurface("text", cursor=2)

    with pytest.raises(BlockLookupError) as excinfo:
        delete_current_line(surface)

    assert isinstance(excinfo.value, SurfaceError)
    assert excinfo.value.offset == 2
    assert surface.text == "text"


def test_block_lookup_outside_document_raises() -> None:
    surface = MemorySurface("abc")

    with pytest.raises(BlockLookupError):
        surface.find_enclosing_block_range(10)
