"""Exceptions raised while suggesting and applying patches."""


class CodemodError(Exception):
    """Base class for codemod errors."""


class InvalidRange(CodemodError, ValueError):
    """An offset range does not fit the source text it refers to."""

    def __init__(self, start: int, end: int, length: int):
        super().__init__(f"Invalid range [{start}, {end}) for text of length {length}")
        self.start = start
        self.end = end
        self.length = length


class OverlappingPatches(CodemodError):
    """Two accepted patches touch the same region of a file."""

    def __init__(self, first, second):
        super().__init__(
            f"Overlapping patches: [{first.start}, {first.end}) and "
            f"[{second.start}, {second.end}) in {first.source.url}"
        )
        self.first = first
        self.second = second


class SuggestorError(CodemodError):
    """A suggestor misbehaved (raised, or suggested an empty patch)."""


class InputError(CodemodError):
    """The codemod target is missing or a file could not be read."""
