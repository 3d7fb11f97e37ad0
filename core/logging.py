"""Logging setup for codemod runs.

Log records go to stderr so that stdout stays reserved for diffs, prompts
and the run summary.
"""

import logging
import sys
from typing import Optional, TextIO

from prompt_toolkit.formatted_text import FormattedText

from core.ansi import ansi_output, write_formatted

logger = logging.getLogger("codemods")

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class TerminalLogHandler(logging.Handler):
    """Write log records to a stream, colored by level when ANSI is enabled."""

    def __init__(self, stream: TextIO, ansi: bool = False):
        super().__init__()
        self.stream = stream
        self.ansi = ansi
        self._output = ansi_output(stream) if ansi else None
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            style = f"class:level-{record.levelname.lower()}"
            write_formatted(
                self.stream,
                FormattedText([(style, message + "\n")]),
                self.ansi,
                output=self._output,
            )
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False, stream: Optional[TextIO] = None, ansi: bool = False) -> logging.Logger:
    """
    Route codemod logs to ``stream`` (stderr by default).

    Args:
        verbose: Log everything (DEBUG) instead of INFO and above.
        stream: Destination stream.
        ansi: Color records by level.

    Returns:
        The configured codemod logger.
    """
    for handler in list(logger.handlers):
        if isinstance(handler, TerminalLogHandler):
            logger.removeHandler(handler)

    handler = TerminalLogHandler(stream or sys.stderr, ansi=ansi)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
