"""Colored terminal output helpers built on prompt_toolkit."""

import shutil
from typing import TextIO

from prompt_toolkit import print_formatted_text
from prompt_toolkit.data_structures import Size
from prompt_toolkit.formatted_text.utils import fragment_list_to_text
from prompt_toolkit.output.color_depth import ColorDepth
from prompt_toolkit.output.vt100 import Vt100_Output
from prompt_toolkit.styles import Style

STYLE = Style.from_dict({
    "header": "bold",
    "lineno": "ansiblue",
    "highlight": "ansiyellow bold",
    "removed": "ansired",
    "added": "ansigreen",
    "omitted": "ansibrightblack italic",
    "prompt": "bold",
    "level-debug": "ansibrightblack",
    "level-info": "",
    "level-warning": "ansiyellow",
    "level-error": "ansired",
    "level-critical": "ansired bold",
})

CLEAR_SCREEN = "\x1b[2J\x1b[H"


def supports_ansi(stream: TextIO) -> bool:
    """Return True if ``stream`` is an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def ansi_output(stream: TextIO) -> Vt100_Output:
    """Create a prompt_toolkit output writing escape sequences to ``stream``."""

    def get_size() -> Size:
        columns, rows = shutil.get_terminal_size()
        return Size(rows=rows, columns=columns)

    return Vt100_Output(stream, get_size, default_color_depth=ColorDepth.DEPTH_4_BIT)


def write_formatted(stream: TextIO, fragments, ansi: bool, output=None) -> None:
    """
    Write formatted text fragments to ``stream``.

    Args:
        stream: Destination text stream.
        fragments: prompt_toolkit formatted text.
        ansi: Whether to emit color escape sequences.
        output: Optional prebuilt prompt_toolkit output for ``stream``.
    """
    if not ansi:
        stream.write(fragment_list_to_text(fragments))
        stream.flush()
        return
    print_formatted_text(
        fragments,
        end="",
        style=STYLE,
        output=output or ansi_output(stream),
        flush=True,
    )
