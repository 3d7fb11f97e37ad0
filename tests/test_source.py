"""Tests for SourceText line/column lookup."""

import pytest

from codemods.errors import InvalidRange
from codemods.source import SourceText


class TestSourceText:
    """Test offset and line lookup."""

    def test_location_of_offsets(self):
        source = SourceText("ab\ncd\n\nef", url="x.py")
        assert source.location(0) == (0, 0)
        assert source.location(2) == (0, 2)
        assert source.location(3) == (1, 0)
        assert source.location(6) == (2, 0)
        assert source.location(7) == (3, 0)
        assert source.location(9) == (3, 2)

    def test_line_count_includes_trailing_line(self):
        assert SourceText("a\nb\n").line_count == 3
        assert SourceText("a\nb").line_count == 2
        assert SourceText("").line_count == 1

    def test_line_text_excludes_newline(self):
        source = SourceText("first\nsecond\n")
        assert source.line_text(0) == "first"
        assert source.line_text(1) == "second"
        assert source.line_text(2) == ""

    def test_offset_of_round_trips_location(self):
        source = SourceText("def f():\n    return 1\n")
        offset = source.offset_of(1, 4)
        assert source.text[offset:offset + 6] == "return"
        assert source.location(offset) == (1, 4)

    def test_offset_of_end_of_line(self):
        source = SourceText("abc\ndef")
        assert source.offset_of(0, 3) == 3
        assert source.offset_of(1, 3) == 7

    def test_offset_of_rejects_column_past_line(self):
        source = SourceText("abc\ndef")
        with pytest.raises(InvalidRange):
            source.offset_of(0, 4)

    def test_offset_of_rejects_missing_line(self):
        with pytest.raises(IndexError):
            SourceText("abc").offset_of(3, 0)

    def test_crlf_keeps_carriage_return_in_line(self):
        source = SourceText("a\r\nb\r\n")
        assert source.line_text(0) == "a\r"
        assert source.location(3) == (1, 0)

    def test_out_of_range_offset(self):
        source = SourceText("abc")
        with pytest.raises(InvalidRange):
            source.line_of(4)
        with pytest.raises(InvalidRange):
            source.line_of(-1)

    def test_span_text(self):
        source = SourceText("hello world")
        assert source.span_text(6) == "world"
        assert source.span_text(0, 5) == "hello"
        with pytest.raises(InvalidRange):
            source.span_text(5, 2)
