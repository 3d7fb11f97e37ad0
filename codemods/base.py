"""Suggestor protocol and the generic suggestor building blocks."""

import re
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional, Pattern, Protocol, Tuple, Union

from .patch import Patch
from .source import SourceText


class Suggestor(Protocol):
    """Protocol for anything that proposes patches for a file."""

    def should_skip(self, source_text: str) -> bool:
        """
        Cheap pre-check run before a file is indexed.

        Args:
            source_text: Full contents of the file.

        Returns:
            True to leave the file alone without generating patches.
        """
        ...

    def generate_patches(self, source: SourceText) -> Iterable[Patch]:
        """
        Propose patches for one file.

        Args:
            source: Snapshot of the file being processed.

        Returns:
            Patches in the order they should be shown to the user. Generators
            are consumed lazily, one patch per prompt.
        """
        ...


class BaseSuggestor(ABC):
    """Base class for suggestors with common functionality."""

    def __init__(self, name: str = "", description: str = ""):
        self.name = name or type(self).__name__
        self.description = description

    def should_skip(self, source_text: str) -> bool:
        return False

    @abstractmethod
    def generate_patches(self, source: SourceText) -> Iterable[Patch]:
        """Generate patches."""
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class AggregateSuggestor(BaseSuggestor):
    """
    Run several suggestors as one pass over each file.

    Each inner suggestor's ``should_skip`` is honored individually and their
    patches are chained in the given order. Use this when the suggestors do not
    depend on each other's edits; otherwise run them as a sequence.
    """

    def __init__(self, suggestors: Iterable[Suggestor], name: str = "aggregate"):
        super().__init__(name=name, description="Combined suggestors")
        self.suggestors: List[Suggestor] = list(suggestors)

    def generate_patches(self, source: SourceText) -> Iterator[Patch]:
        for suggestor in self.suggestors:
            if suggestor.should_skip(source.text):
                continue
            yield from suggestor.generate_patches(source)


class RegexSuggestor(BaseSuggestor):
    """
    Suggest one patch per regular expression match.

    Subclasses set ``pattern`` (or pass it in) and implement
    ``generate_replacement``. By default the whole match is replaced; set
    ``group`` to replace only one group of each match.
    """

    pattern: Optional[Pattern[str]] = None
    group: Union[int, str] = 0

    def __init__(self, pattern: Union[str, Pattern[str], None] = None, name: str = "", description: str = ""):
        super().__init__(name=name, description=description)
        if pattern is not None:
            self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        if self.pattern is None:
            raise ValueError(f"{type(self).__name__} needs a pattern")

    @abstractmethod
    def generate_replacement(self, match: "re.Match[str]") -> str:
        """Return the text that replaces the matched region."""
        pass

    def match_span(self, match: "re.Match[str]") -> Tuple[int, int]:
        """Return the region of ``match`` to replace."""
        return match.span(self.group)

    def generate_patches(self, source: SourceText) -> Iterator[Patch]:
        for match in self.pattern.finditer(source.text):
            start, end = self.match_span(match)
            if start == -1:
                continue
            yield Patch(source, start, end, self.generate_replacement(match))
