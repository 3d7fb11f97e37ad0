"""Tests for the library entry points and their global flags."""

import dataclasses

from codemods.base import BaseSuggestor
from codemods.file_query import FileQuery, is_python_file
from codemods.interactive import run_interactive_codemod, run_interactive_codemod_sequence
from codemods.runner import ExitCode
from core.config import DEFAULT_CONFIG

from conftest import FILE_A, FILE_B, OneToTwoSuggestor, ScriptedTerminal, TwoToThreeSuggestor


def run(project, args, answers=(), **kwargs):
    terminal = ScriptedTerminal(answers)
    code = run_interactive_codemod(
        FileQuery.dir(str(project), path_filter=is_python_file),
        OneToTwoSuggestor(),
        args=args,
        terminal=terminal,
        config=DEFAULT_CONFIG,
        **kwargs,
    )
    return code, terminal


def read(project):
    return (project / "a.py").read_text(), (project / "b.py").read_text()


class TestHelp:
    """Test --help output."""

    def test_help_lists_global_options(self, project):
        code, terminal = run(project, ["--help"])
        assert code == ExitCode.SUCCESS
        assert terminal.err.startswith("Global codemod options:\n\n")
        for flag in ("--verbose", "--yes-to-all", "--fail-on-changes", "--stderr-assume-tty"):
            assert flag in terminal.err
        assert read(project) == (FILE_A, FILE_B)

    def test_short_help_flag(self, project):
        code, terminal = run(project, ["-h"])
        assert code == ExitCode.SUCCESS
        assert "Global codemod options:" in terminal.err

    def test_additional_help_output(self, project):
        code, terminal = run(project, ["--help"], additional_help_output="Set FOO to pick a target.")
        assert code == ExitCode.SUCCESS
        assert "Additional options for this codemod:\nSet FOO to pick a target." in terminal.err

    def test_help_wins_over_other_flags(self, project):
        code, _ = run(project, ["--yes-to-all", "--help"])
        assert code == ExitCode.SUCCESS
        assert read(project) == (FILE_A, FILE_B)


class TestArguments:
    """Test global flag parsing."""

    def test_unknown_flag_is_a_usage_error(self, project):
        code, terminal = run(project, ["--bogus"])
        assert code == ExitCode.USAGE
        assert terminal.err.startswith("Invalid codemod arguments: ")
        assert "--yes-to-all" in terminal.err
        assert read(project) == (FILE_A, FILE_B)

    def test_positional_argument_is_a_usage_error(self, project):
        code, _ = run(project, ["extra"])
        assert code == ExitCode.USAGE

    def test_yes_to_all(self, project):
        code, terminal = run(project, ["--yes-to-all"])
        assert code == ExitCode.SUCCESS
        assert terminal.prompts == 0
        assert read(project) == ("a = 2\nb = 2\nc = 2\n", "d = 2\ne = 2\nf = 2\n")

    def test_fail_on_changes(self, project):
        code, terminal = run(project, ["--fail-on-changes"], changes_required_output="Run ./fix.py")
        assert code == ExitCode.CHANGES_NEEDED
        assert "6 change(s) needed." in terminal.err
        assert "Run ./fix.py" in terminal.err
        assert read(project) == (FILE_A, FILE_B)

    def test_no_arguments_prompts(self, project):
        code, terminal = run(project, None, ["y"] + ["n"] * 5)
        assert code == ExitCode.SUCCESS
        assert terminal.prompts == 6
        assert read(project) == ("a = 2\nb = 1\nc = 1\n", FILE_B)

    def test_default_yes(self, project):
        code, _ = run(project, [], [""] * 6, default_yes=True)
        assert code == ExitCode.SUCCESS
        assert read(project) == ("a = 2\nb = 2\nc = 2\n", "d = 2\ne = 2\nf = 2\n")

    def test_default_yes_comes_from_config(self, project):
        config = dataclasses.replace(DEFAULT_CONFIG, prompt_default_yes=True)
        terminal = ScriptedTerminal([""] * 6)
        code = run_interactive_codemod(
            FileQuery.dir(str(project), path_filter=is_python_file),
            OneToTwoSuggestor(),
            args=[],
            terminal=terminal,
            config=config,
        )
        assert code == ExitCode.SUCCESS
        assert "y = yes [default]" in terminal.out
        assert read(project) == ("a = 2\nb = 2\nc = 2\n", "d = 2\ne = 2\nf = 2\n")

    def test_explicit_default_overrides_config(self, project):
        config = dataclasses.replace(DEFAULT_CONFIG, prompt_default_yes=True)
        terminal = ScriptedTerminal([""] * 6)
        run_interactive_codemod(
            FileQuery.dir(str(project), path_filter=is_python_file),
            OneToTwoSuggestor(),
            args=[],
            default_yes=False,
            terminal=terminal,
            config=config,
        )
        assert read(project) == (FILE_A, FILE_B)

    def test_verbose_logs_debug(self, project):
        code, terminal = run(project, ["--verbose", "--yes-to-all"])
        assert code == ExitCode.SUCCESS
        assert "[DEBUG] codemods.runner: patch accepted" in terminal.err


class BrokenSuggestor(BaseSuggestor):
    def generate_patches(self, source):
        yield "not a patch"


def test_missing_target_exit_code(tmp_path):
    terminal = ScriptedTerminal()
    code = run_interactive_codemod(
        FileQuery.dir(str(tmp_path / "missing")),
        OneToTwoSuggestor(),
        args=[],
        terminal=terminal,
        config=DEFAULT_CONFIG,
    )
    assert code == ExitCode.NO_INPUT
    assert "codemod target does not exist" in terminal.err


def test_uncaught_exception(project):
    terminal = ScriptedTerminal()
    code = run_interactive_codemod(
        FileQuery.dir(str(project)),
        BrokenSuggestor(),
        args=["--yes-to-all"],
        terminal=terminal,
        config=DEFAULT_CONFIG,
    )
    assert code == ExitCode.SOFTWARE
    assert terminal.err.startswith("Uncaught exception:")
    assert "Traceback" in terminal.err


def test_sequence_runs_each_suggestor(project):
    terminal = ScriptedTerminal()
    code = run_interactive_codemod_sequence(
        FileQuery.dir(str(project), path_filter=is_python_file),
        [OneToTwoSuggestor(), TwoToThreeSuggestor()],
        args=["--yes-to-all"],
        terminal=terminal,
        config=DEFAULT_CONFIG,
    )
    assert code == ExitCode.SUCCESS
    assert read(project) == ("a = 3\nb = 3\nc = 3\n", "d = 3\ne = 3\nf = 3\n")
