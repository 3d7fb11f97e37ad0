"""Discover the files a codemod should run over."""

import fnmatch
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence

from core.config import DEFAULT_CONFIG

PathFilter = Callable[[str], bool]


def has_extension(*extensions: str) -> PathFilter:
    """Build a path filter accepting files that end with one of ``extensions``."""
    suffixes = tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions)

    def _filter(path: str) -> bool:
        return path.endswith(suffixes)

    return _filter


is_python_file = has_extension(".py")
is_js_file = has_extension(".js", ".jsx", ".ts", ".tsx")


class FileQuery:
    """
    A target (single file or directory) plus the rules for walking it.

    Paths are yielded in whatever order the filesystem returns them; the
    runner sorts them before use.
    """

    def __init__(
        self,
        target: str,
        is_dir: bool,
        path_filter: Optional[PathFilter] = None,
        recursive: bool = False,
        follow_links: bool = True,
        ignored_globs: Optional[Sequence[str]] = None,
    ):
        self.target = target
        self.is_dir = is_dir
        self.path_filter = path_filter
        self.recursive = recursive
        self.follow_links = follow_links
        self.ignored_globs: List[str] = list(
            DEFAULT_CONFIG.files_ignored_globs if ignored_globs is None else ignored_globs
        )

    @classmethod
    def single(cls, path: str) -> "FileQuery":
        """Query for exactly one file."""
        return cls(str(path), is_dir=False, ignored_globs=[])

    @classmethod
    def dir(
        cls,
        path: str = ".",
        path_filter: Optional[PathFilter] = None,
        recursive: bool = False,
        follow_links: bool = True,
        ignored_globs: Optional[Sequence[str]] = None,
    ) -> "FileQuery":
        """
        Query for the files inside a directory.

        Args:
            path: Directory to search.
            path_filter: Predicate on each candidate path; files failing it are dropped.
            recursive: Descend into subdirectories.
            follow_links: Follow symlinked directories while descending.
            ignored_globs: Glob patterns of paths to leave out.
        """
        return cls(
            str(path),
            is_dir=True,
            path_filter=path_filter,
            recursive=recursive,
            follow_links=follow_links,
            ignored_globs=ignored_globs,
        )

    @property
    def target_exists(self) -> bool:
        if self.is_dir:
            return os.path.isdir(self.target)
        return os.path.isfile(self.target)

    def _is_ignored(self, path: str) -> bool:
        candidate = Path(path).as_posix()
        for pattern in self.ignored_globs:
            if fnmatch.fnmatch(candidate, pattern) or fnmatch.fnmatch(f"/{candidate}", pattern):
                return True
        return False

    def _accepts(self, path: str) -> bool:
        if self._is_ignored(path):
            return False
        return self.path_filter is None or self.path_filter(path)

    def generate_file_paths(self) -> Iterator[str]:
        """Yield candidate file paths under the target."""
        if not self.is_dir:
            if os.path.isfile(self.target):
                yield self.target
            return

        if not self.recursive:
            for entry in os.scandir(self.target):
                path = os.path.join(self.target, entry.name)
                if entry.is_file(follow_symlinks=self.follow_links) and self._accepts(path):
                    yield path
            return

        for root, _dirs, files in os.walk(self.target, followlinks=self.follow_links):
            for name in files:
                path = os.path.join(root, name)
                if self._accepts(path):
                    yield path

    def __repr__(self):
        kind = "dir" if self.is_dir else "single"
        return f"FileQuery.{kind}({self.target!r})"
