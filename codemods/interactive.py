"""Entry points for running a codemod script from the command line.

A codemod script builds a query and a suggestor and hands its command line
arguments over::

    import sys
    from codemods import FileQuery, is_python_file, run_interactive_codemod

    if __name__ == "__main__":
        sys.exit(run_interactive_codemod(
            FileQuery.dir("src", path_filter=is_python_file, recursive=True),
            ExampleSuggestor(),
            args=sys.argv[1:],
        ))

Logs go to stderr: only INFO and above by default, everything with
``--verbose``. The screen is cleared before every patch, so when debugging
redirect stderr to a file and follow it from another terminal::

    $ python example_codemod.py --verbose 2>stderr.txt

``--stderr-assume-tty`` keeps the log colors in the redirected file.
"""

import traceback
from typing import Iterable, Optional, Sequence

import click

from core.config import Config, get_config
from core.logging import setup_logging

from .base import Suggestor
from .file_query import FileQuery
from .runner import CodemodRunner, ExitCode, RunMode
from .terminal import Terminal

PROG_NAME = "codemod"


def _report_uncaught(terminal: Terminal, error: Exception) -> None:
    terminal.write_error_line("Uncaught exception:")
    terminal.write_error_line(str(error))
    terminal.write_error_line("".join(traceback.format_exception(type(error), error, error.__traceback__)))


def execute(
    query: FileQuery,
    suggestors: Iterable[Suggestor],
    mode: RunMode,
    terminal: Optional[Terminal] = None,
    config: Optional[Config] = None,
    changes_required_output: Optional[str] = None,
) -> int:
    """
    Run ``suggestors`` over ``query`` with an already parsed ``mode``.

    Returns:
        The process exit code.
    """
    terminal = terminal or Terminal(
        clear_screen=(config or get_config()).prompt_clear_screen
    )
    setup_logging(
        verbose=mode.verbose,
        stream=terminal.stderr,
        ansi=terminal.stderr_ansi or mode.stderr_assume_tty,
    )
    try:
        result = CodemodRunner(
            query,
            suggestors,
            mode=mode,
            terminal=terminal,
            config=config,
            changes_required_output=changes_required_output,
        ).run()
    except Exception as e:
        _report_uncaught(terminal, e)
        return ExitCode.SOFTWARE
    return int(result.exit_code)


def build_codemod_command(
    query: FileQuery,
    suggestors: Sequence[Suggestor],
    default_yes: bool,
    terminal: Optional[Terminal],
    config: Config,
    additional_help_output: str,
    changes_required_output: Optional[str],
) -> click.Command:
    """Build the command that parses the global codemod flags and runs the codemod."""

    @click.command(name=PROG_NAME, add_help_option=False)
    @click.option("-h", "--help", "show_help", is_flag=True, help="Prints this help output.")
    @click.option("-v", "--verbose", is_flag=True, help="Outputs all logging to stdout/stderr.")
    @click.option(
        "--yes-to-all", is_flag=True,
        help="Forces all patches accepted without prompting the user. Useful for scripts.",
    )
    @click.option(
        "--fail-on-changes", is_flag=True,
        help="Returns a non-zero exit code if there are changes to be made. "
             "Will not make any changes (i.e. this is a dry-run).",
    )
    @click.option(
        "--stderr-assume-tty", is_flag=True,
        help="Forces ansi color highlighting of stderr. Useful for debugging.",
    )
    @click.pass_context
    def codemod(
        ctx: click.Context,
        show_help: bool,
        verbose: bool,
        yes_to_all: bool,
        fail_on_changes: bool,
        stderr_assume_tty: bool,
    ) -> int:
        """Interactively apply suggested patches."""
        out = terminal or Terminal(clear_screen=config.prompt_clear_screen)
        if show_help:
            out.write_error_line("Global codemod options:")
            out.write_error_line()
            out.write_error_line(ctx.get_help())
            if additional_help_output:
                out.write_error_line()
                out.write_error_line("Additional options for this codemod:")
                out.write_error_line(additional_help_output)
            return ExitCode.SUCCESS

        mode = RunMode(
            fail_on_changes=fail_on_changes,
            yes_to_all=yes_to_all,
            default_yes=default_yes,
            verbose=verbose,
            stderr_assume_tty=stderr_assume_tty,
        )
        return execute(
            query,
            suggestors,
            mode,
            terminal=out,
            config=config,
            changes_required_output=changes_required_output,
        )

    return codemod


def run_interactive_codemod_sequence(
    query: FileQuery,
    suggestors: Iterable[Suggestor],
    args: Optional[Sequence[str]] = None,
    default_yes: Optional[bool] = None,
    additional_help_output: Optional[str] = None,
    changes_required_output: Optional[str] = None,
    terminal: Optional[Terminal] = None,
    config: Optional[Config] = None,
) -> int:
    """
    Same as ``run_interactive_codemod`` but runs every suggestor in turn.

    The files found by ``query`` are swept once per suggestor, in order, so a
    suggestor sees the edits accepted for the ones before it. Suggestors that
    do not depend on each other can be combined into an
    ``AggregateSuggestor`` and run in a single pass instead.

    Returns:
        The process exit code.
    """
    config = config or get_config()
    if default_yes is None:
        default_yes = config.prompt_default_yes
    args = list(args or [])

    command = build_codemod_command(
        query,
        list(suggestors),
        default_yes=default_yes,
        terminal=terminal,
        config=config,
        additional_help_output=additional_help_output or "",
        changes_required_output=changes_required_output,
    )
    err = terminal or Terminal()
    try:
        return int(command.main(args=args, prog_name=PROG_NAME, standalone_mode=False))
    except click.UsageError as e:
        err.write_error_line(f"Invalid codemod arguments: {e.format_message()}")
        err.write_error_line()
        err.write_error_line(e.ctx.get_help() if e.ctx else command.get_usage(click.Context(command)))
        return ExitCode.USAGE
    except Exception as e:
        _report_uncaught(err, e)
        return ExitCode.SOFTWARE


def run_interactive_codemod(
    query: FileQuery,
    suggestor: Suggestor,
    args: Optional[Sequence[str]] = None,
    default_yes: Optional[bool] = None,
    additional_help_output: Optional[str] = None,
    changes_required_output: Optional[str] = None,
    terminal: Optional[Terminal] = None,
    config: Optional[Config] = None,
) -> int:
    """
    Interactively run a codemod and return an exit code.

    Every patch ``suggestor`` proposes for the files of ``query`` is shown as
    a diff and the user answers y (accept), n (skip), A (accept this and all
    remaining patches) or q (apply what was accepted for the current file and
    stop).

    Args:
        query: Files to run over.
        suggestor: Proposes patches for each file.
        args: Command line arguments (``--help``, ``--verbose``,
            ``--yes-to-all``, ``--fail-on-changes``, ``--stderr-assume-tty``).
        default_yes: Whether pressing enter accepts a patch. Defaults to the
            ``prompt.default_yes`` setting, which is off.
        additional_help_output: Extra text printed after the global options
            for ``--help``.
        changes_required_output: Extra text printed when ``--fail-on-changes``
            finds changes.
        terminal: Output/prompt collaborator; the process streams by default.
        config: Settings; loaded from ``~/.codemod.toml`` by default.

    Returns:
        0 on success, 1 when ``--fail-on-changes`` found changes, 64 on bad
        arguments, 66 when the target is missing or unreadable and 70 when a
        suggestor misbehaved or something unexpected went wrong.
    """
    return run_interactive_codemod_sequence(
        query,
        [suggestor],
        args=args,
        default_yes=default_yes,
        additional_help_output=additional_help_output,
        changes_required_output=changes_required_output,
        terminal=terminal,
        config=config,
    )
