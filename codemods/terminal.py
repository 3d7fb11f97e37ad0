"""Terminal collaborator used by the runner for output and prompting."""

import shutil
import sys
from typing import Optional, TextIO

import click

from core.ansi import CLEAR_SCREEN, ansi_output, supports_ansi, write_formatted


class Terminal:
    """
    Output streams plus what the terminal behind them can do.

    Diffs, prompts and the run summary go to ``stdout``; diagnostics go to
    ``stderr``; decisions are read from ``stdin``. Tests substitute a subclass
    with scripted ``prompt`` answers.
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        ansi: Optional[bool] = None,
        stderr_ansi: Optional[bool] = None,
        clear_screen: bool = True,
        stdin: Optional[TextIO] = None,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.ansi = supports_ansi(self.stdout) if ansi is None else ansi
        self.stderr_ansi = supports_ansi(self.stderr) if stderr_ansi is None else stderr_ansi
        self.clear_screen = clear_screen
        self._output = ansi_output(self.stdout) if self.ansi else None

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    def write_error_line(self, text: str = "") -> None:
        self.stderr.write(text + "\n")
        self.stderr.flush()

    def write_formatted(self, fragments) -> None:
        write_formatted(self.stdout, fragments, self.ansi, output=self._output)

    def clear(self) -> None:
        """Clear the screen before rendering the next patch."""
        if self.ansi and self.clear_screen:
            self.write(CLEAR_SCREEN)

    def diff_size(self, reserved: int, minimum: int, fallback: int) -> int:
        """
        Number of diff lines that fit on screen.

        Args:
            reserved: Rows kept free for the source excerpt and the prompt.
            minimum: Smallest size ever returned for a real terminal.
            fallback: Size used when stdout is not a terminal.
        """
        if not self.ansi:
            return fallback
        rows = shutil.get_terminal_size().lines
        return max(minimum, rows - reserved)

    def prompt(self, choices: str, default: str) -> str:
        """
        Read one answer out of ``choices`` from ``stdin``.

        Blank input yields ``default``; anything outside ``choices`` is
        rejected with an error on ``stdout`` and asked again. Matching is
        case-sensitive. End of input and Ctrl-C count as ``q``.
        """
        choice = click.Choice(list(choices), case_sensitive=True)
        while True:
            try:
                line = self.stdin.readline()
            except KeyboardInterrupt:
                self.write_line()
                return "q"
            if not line:
                return "q"

            answer = line.rstrip("\r\n")
            if not answer:
                return default
            try:
                return choice.convert(answer, None, None)
            except click.BadParameter as e:
                self.write_line(f"Error: {e.format_message()}")
