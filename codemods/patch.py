"""Patch model: a proposed replacement of one offset range in a source file."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.formatted_text.utils import fragment_list_to_text

from .errors import InvalidRange
from .source import SourceText


def to_plain_text(fragments) -> str:
    """Flatten formatted text produced by the render helpers into a plain string."""
    return fragment_list_to_text(fragments)


@dataclass(frozen=True)
class Patch:
    """
    A suggested edit against a ``SourceText``.

    The half-open range ``[start, end)`` is replaced by ``replacement``.
    ``start == end`` is a pure insertion and an empty ``replacement`` is a pure
    deletion. Leaving ``end`` as ``None`` extends the patch to the end of the
    text.
    """

    source: SourceText
    start: int
    end: Optional[int]
    replacement: str

    def __post_init__(self):
        length = self.source.length
        end = length if self.end is None else self.end
        if self.start < 0 or end > length or self.start > end:
            raise InvalidRange(self.start, end, length)
        object.__setattr__(self, "end", end)

    @property
    def original_text(self) -> str:
        """Text currently occupying the patched range."""
        return self.source.text[self.start:self.end]

    @property
    def is_noop(self) -> bool:
        """True when applying this patch would not change anything."""
        return self.replacement == self.original_text

    def _line_range(self) -> Tuple[int, int]:
        first = self.source.line_of(self.start)
        last = self.source.line_of(self.end)
        # A range ending right after a newline does not touch the next line.
        if last > first and self.source.column_of(self.end) == 0:
            last -= 1
        return first, last

    def render_range(self, context_lines: int = 2) -> FormattedText:
        """
        Render the lines around the patch with the affected region underlined.

        Args:
            context_lines: Number of unaffected lines to show above and below.

        Returns:
            Formatted text fragments (use ``to_plain_text`` for a plain string).
        """
        source = self.source
        first, last = self._line_range()
        top = max(0, first - context_lines)
        bottom = min(source.line_count - 1, last + context_lines)
        width = len(str(bottom + 1))

        line, column = source.location(self.start)
        fragments: List[Tuple[str, str]] = [
            ("class:header", f"line {line + 1}, column {column + 1} of {source.url or '<text>'}:\n")
        ]
        for number in range(top, bottom + 1):
            text = source.line_text(number).rstrip("\r")
            fragments.append(("class:lineno", f"{number + 1:>{width}} | "))
            fragments.append(("", text + "\n"))
            if not first <= number <= last:
                continue

            line_start = source.line_start(number)
            begin = self.start - line_start if number == first else 0
            if number == last and self.end <= line_start + len(text):
                finish = self.end - line_start
            else:
                finish = len(text)
            fragments.append(("class:lineno", " " * width + " | "))
            fragments.append(("class:highlight", " " * begin + "^" * max(1, finish - begin) + "\n"))
        return FormattedText(fragments)

    def render_diff(self, max_lines: int) -> FormattedText:
        """
        Render removed and added lines for this patch.

        The first and last lines of the diff body are always kept; when the
        body is longer than ``max_lines`` the middle is replaced by a marker
        counting the omitted lines. A header line naming the location is
        printed in addition to the body.

        Args:
            max_lines: Maximum number of body lines, clamped to at least 3.

        Returns:
            Formatted text fragments (use ``to_plain_text`` for a plain string).
        """
        source = self.source
        first, last = self._line_range()
        block_start = source.line_start(first)
        block_end = max(source.line_end(last), self.end)

        old_block = source.text[block_start:block_end]
        new_block = (
            source.text[block_start:self.start]
            + self.replacement
            + source.text[self.end:block_end]
        )

        body = [("class:removed", "-" + text) for text in old_block.splitlines()]
        body += [("class:added", "+" + text) for text in new_block.splitlines()]

        max_lines = max(3, max_lines)
        if len(body) > max_lines:
            tail = (max_lines - 1) // 2
            head = max_lines - 1 - tail
            omitted = len(body) - head - tail
            body = (
                body[:head]
                + [("class:omitted", f"... {omitted} line(s) omitted ...")]
                + body[len(body) - tail:]
            )

        fragments: List[Tuple[str, str]] = [
            ("class:header", f"@@ {source.url or '<text>'}:{first + 1} @@\n")
        ]
        for style, text in body:
            fragments.append((style, text + "\n"))
        return FormattedText(fragments)

    def __str__(self):
        start_line, start_column = self.source.location(self.start)
        end_line, end_column = self.source.location(self.end)
        return (
            f"<Patch: on {self.source.url or '<text>'} from "
            f"{start_line + 1}:{start_column + 1} to {end_line + 1}:{end_column + 1}: "
            f"{self.replacement!r}>"
        )
