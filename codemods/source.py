"""Line and column lookup over a snapshot of a file's text."""

from bisect import bisect_right
from typing import List, Optional, Tuple

from .errors import InvalidRange


class SourceText:
    """
    Immutable snapshot of a file's contents.

    Patches are built against a ``SourceText`` and their offsets index into
    exactly this text. Once a file has been rewritten a new snapshot has to be
    read before suggesting further patches.
    """

    __slots__ = ("_text", "_url", "_line_starts")

    def __init__(self, text: str, url: Optional[str] = None):
        self._text = text
        self._url = url
        self._line_starts = self._compute_line_starts(text)

    @staticmethod
    def _compute_line_starts(text: str) -> List[int]:
        starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                starts.append(index + 1)
        return starts

    @property
    def text(self) -> str:
        return self._text

    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        """Number of lines, counting a trailing partial line."""
        return len(self._line_starts)

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset > len(self._text):
            raise InvalidRange(offset, offset, len(self._text))

    def line_of(self, offset: int) -> int:
        """Return the 0-based line containing ``offset``."""
        self._check_offset(offset)
        return bisect_right(self._line_starts, offset) - 1

    def column_of(self, offset: int) -> int:
        """Return the 0-based column of ``offset`` within its line."""
        return offset - self._line_starts[self.line_of(offset)]

    def location(self, offset: int) -> Tuple[int, int]:
        """Return ``(line, column)`` for ``offset``, both 0-based."""
        line = self.line_of(offset)
        return line, offset - self._line_starts[line]

    def line_start(self, line: int) -> int:
        """Return the offset of the first character of ``line``."""
        if line < 0 or line >= len(self._line_starts):
            raise IndexError(f"Line {line} out of range for {self._url or '<text>'}")
        return self._line_starts[line]

    def line_end(self, line: int) -> int:
        """Return the offset just past ``line``'s content, excluding its newline."""
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        self.line_start(line)
        return len(self._text)

    def offset_of(self, line: int, column: int) -> int:
        """
        Convert a 0-based ``(line, column)`` pair to an offset.

        Args:
            line: 0-based line number.
            column: 0-based column, at most the length of the line.

        Returns:
            Offset into the text.

        Raises:
            IndexError: If the line does not exist.
            InvalidRange: If the column lies past the end of the line.
        """
        start = self.line_start(line)
        offset = start + column
        if column < 0 or offset > self.line_end(line):
            raise InvalidRange(offset, offset, len(self._text))
        return offset

    def line_text(self, line: int) -> str:
        """Return the text of ``line`` without its line terminator."""
        return self._text[self.line_start(line):self.line_end(line)]

    def span_text(self, start: int, end: Optional[int] = None) -> str:
        """Return the text in ``[start, end)``; ``end`` defaults to the end of the text."""
        if end is None:
            end = len(self._text)
        if start < 0 or end > len(self._text) or start > end:
            raise InvalidRange(start, end, len(self._text))
        return self._text[start:end]

    def __repr__(self):
        return f"SourceText({self._url!r}, length={len(self._text)})"
