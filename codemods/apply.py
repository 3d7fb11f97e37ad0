"""Stitch accepted patches into new file contents and write them back."""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from core.logging import logger

from .errors import OverlappingPatches
from .patch import Patch
from .source import SourceText


def sort_patches(patches: Iterable[Patch]) -> List[Patch]:
    """Order patches by start then end offset, keeping generation order for ties."""
    return sorted(patches, key=lambda patch: (patch.start, patch.end))


def apply_patches(source: Union[SourceText, str], patches: Iterable[Patch]) -> str:
    """
    Apply non-overlapping patches to a text in a single pass.

    Args:
        source: The text the patches were generated against.
        patches: Accepted patches, in any order.

    Returns:
        The updated text. With no patches this is the original text.

    Raises:
        OverlappingPatches: If two patches cover the same region.
        ValueError: If a patch was built against different text.
    """
    text = source.text if isinstance(source, SourceText) else source
    ordered = sort_patches(patches)

    for patch in ordered:
        if patch.source.text is not text and patch.source.text != text:
            raise ValueError(f"Patch does not belong to this text: {patch}")
    for previous, current in zip(ordered, ordered[1:]):
        if previous.end > current.start:
            raise OverlappingPatches(previous, current)

    chunks = []
    cursor = 0
    for patch in ordered:
        chunks.append(text[cursor:patch.start])
        chunks.append(patch.replacement)
        cursor = patch.end
    chunks.append(text[cursor:])
    return "".join(chunks)


def write_atomic(path: Union[str, Path], text: str) -> None:
    """
    Replace the contents of ``path`` without exposing a partially written file.

    The new contents go to a temporary file in the same directory which is then
    moved over the original. Line endings are written exactly as given.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def apply_patches_and_save(source: SourceText, patches: Iterable[Patch]) -> bool:
    """
    Apply ``patches`` to ``source`` and write the result to ``source.url``.

    Nothing is written when there are no patches.

    Returns:
        True if the file was rewritten.
    """
    patches = list(patches)
    if not patches:
        return False

    updated = apply_patches(source, patches)
    logger.debug(f"writing {len(patches)} patch(es) to {source.url}")
    write_atomic(source.url, updated)
    return True
