"""Interactive driver: walk files, show each suggested patch, apply the accepted ones."""

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Iterator, List, Optional

from core.config import Config, get_config

from .apply import apply_patches_and_save
from .base import Suggestor
from .errors import CodemodError, InputError, SuggestorError
from .file_query import FileQuery
from .patch import Patch
from .source import SourceText
from .terminal import Terminal

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit codes (BSD sysexits values where one applies)."""
    SUCCESS = 0
    CHANGES_NEEDED = 1
    USAGE = 64
    NO_INPUT = 66
    SOFTWARE = 70


class Decision(Enum):
    """Answer to a single patch prompt."""
    ACCEPT = "y"
    REJECT = "n"
    ACCEPT_ALL = "A"
    QUIT = "q"


class DriverState(Enum):
    IDLE = "idle"
    PROMPTING_PATCH = "prompting_patch"
    APPLYING_FILE = "applying_file"
    RUN_COMPLETE = "run_complete"


@dataclass
class RunMode:
    """Settings for one codemod run. Only ``yes_to_all`` changes during a run."""
    fail_on_changes: bool = False
    yes_to_all: bool = False
    default_yes: bool = False
    verbose: bool = False
    stderr_assume_tty: bool = False


@dataclass(frozen=True)
class RunResult:
    """Outcome of a codemod run."""
    exit_code: ExitCode
    num_changes: int = 0
    num_accepted: int = 0
    files_written: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS


def prompt_question(default_yes: bool) -> str:
    if default_yes:
        return "Accept change (y = yes [default], n = no, A = yes to all, q = quit)? "
    return "Accept change (y = yes, n = no [default], A = yes to all, q = quit)? "


def _iter_patches(suggestor: Suggestor, source: SourceText) -> Iterator[Patch]:
    """Pull patches from ``suggestor``, turning any failure into a ``SuggestorError``."""
    try:
        patches = iter(suggestor.generate_patches(source))
    except Exception as e:
        raise SuggestorError(f"{suggestor!r}.generate_patches() threw unexpectedly") from e
    while True:
        try:
            patch = next(patches)
        except StopIteration:
            return
        except Exception as e:
            raise SuggestorError(f"{suggestor!r}.generate_patches() threw unexpectedly") from e
        yield patch


class CodemodRunner:
    """
    Runs suggestors over the files of a query, one full sweep per suggestor.

    Files are visited in sorted path order and patches in the order their
    suggestor yields them. Accepted patches for a file are written in one go
    once the file's patches are exhausted, so a later suggestor sees the
    edits committed by an earlier one.
    """

    def __init__(
        self,
        query: FileQuery,
        suggestors: Iterable[Suggestor],
        mode: Optional[RunMode] = None,
        terminal: Optional[Terminal] = None,
        config: Optional[Config] = None,
        changes_required_output: Optional[str] = None,
    ):
        self.query = query
        self.suggestors: List[Suggestor] = list(suggestors)
        self.mode = mode or RunMode()
        self.terminal = terminal or Terminal()
        self.config = config or get_config()
        self.changes_required_output = changes_required_output or ""
        self.state = DriverState.IDLE
        self.num_changes = 0
        self.num_accepted = 0
        self.files_written = 0

    def run(self) -> RunResult:
        """
        Execute the run.

        Returns:
            The run result. Expected failures (missing input, misbehaving
            suggestors, overlapping or unwritable patches) are logged and
            reported through the exit code.
        """
        try:
            exit_code = self._run()
        except InputError as e:
            logger.error(str(e), exc_info=e.__cause__)
            exit_code = ExitCode.NO_INPUT
        except CodemodError as e:
            # Suggestor faults, overlapping patches and failed writes.
            logger.error(str(e), exc_info=e.__cause__)
            exit_code = ExitCode.SOFTWARE
        finally:
            self.state = DriverState.RUN_COMPLETE

        return RunResult(
            exit_code=exit_code,
            num_changes=self.num_changes,
            num_accepted=self.num_accepted,
            files_written=self.files_written,
        )

    def _run(self) -> ExitCode:
        if not self.query.target_exists:
            raise InputError(f"codemod target does not exist: {self.query.target}")

        self.terminal.write_line("searching...")
        for suggestor in self.suggestors:
            # Paths are re-listed per suggestor; earlier passes may have changed the tree.
            for path in sorted(self.query.generate_file_paths()):
                if not self._process_file(suggestor, path):
                    logger.debug("quitting")
                    return ExitCode.SUCCESS
        logger.debug("done")
        return self._summarize()

    def _read(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Failed to read file: {path}") from e

    def _process_file(self, suggestor: Suggestor, path: str) -> bool:
        """Handle every patch for one file. Returns False when the user quit."""
        logger.debug(f"file: {path}")
        text = self._read(path)

        try:
            should_skip = suggestor.should_skip(text)
        except Exception as e:
            raise SuggestorError(f"{suggestor!r}.should_skip() threw unexpectedly") from e
        if should_skip:
            logger.debug("skipped")
            return True

        source = SourceText(text, url=path)
        accepted: List[Patch] = []

        for patch in _iter_patches(suggestor, source):
            if patch.is_noop:
                raise SuggestorError(f"Empty patch suggested: {patch}")
            self.num_changes += 1

            if self.mode.fail_on_changes:
                continue

            decision = self._decide(patch)
            if decision is Decision.ACCEPT_ALL:
                self.mode.yes_to_all = True
                decision = Decision.ACCEPT

            if decision is Decision.ACCEPT:
                logger.debug(f"patch accepted: {patch}")
                accepted.append(patch)
            elif decision is Decision.QUIT:
                self._apply(source, accepted)
                return False

        if not self.mode.fail_on_changes:
            self._apply(source, accepted)
        self.state = DriverState.IDLE
        return True

    def _decide(self, patch: Patch) -> Decision:
        self.state = DriverState.PROMPTING_PATCH
        config = self.config

        self.terminal.clear()
        self.terminal.write_formatted(patch.render_range(config.diff_context_lines))
        self.terminal.write_line()

        diff_size = self.terminal.diff_size(
            reserved=config.diff_reserved_lines,
            minimum=config.diff_min_lines,
            fallback=config.diff_fallback_lines,
        )
        logger.debug(f"diff size: {diff_size}")
        self.terminal.write_formatted(patch.render_diff(diff_size))
        self.terminal.write_line()

        if self.mode.yes_to_all:
            logger.debug("skipped prompt because yes_to_all is set")
            return Decision.ACCEPT

        default = Decision.ACCEPT if self.mode.default_yes else Decision.REJECT
        self.terminal.write_line(prompt_question(self.mode.default_yes))
        return Decision(self.terminal.prompt("ynAq", default.value))

    def _apply(self, source: SourceText, accepted: List[Patch]) -> None:
        self.state = DriverState.APPLYING_FILE
        logger.debug("applying patches")
        try:
            written = apply_patches_and_save(source, accepted)
        except OSError as e:
            raise CodemodError(f"Failed to write file: {source.url}") from e
        self.num_accepted += len(accepted)
        if written:
            self.files_written += 1

    def _summarize(self) -> ExitCode:
        if not self.mode.fail_on_changes:
            return ExitCode.SUCCESS

        if self.num_changes > 0:
            self.terminal.write_error_line(f"{self.num_changes} change(s) needed.")
            if self.changes_required_output:
                self.terminal.write_error_line()
                self.terminal.write_error_line(self.changes_required_output)
            return ExitCode.CHANGES_NEEDED

        self.terminal.write_line("No changes needed.")
        return ExitCode.SUCCESS
