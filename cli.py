"""CLI entrypoint for running built-in codemods using Typer."""

from pathlib import Path
from typing import Dict, List, Optional

import click
import typer
from typer.core import TyperGroup

from codemods.base import BaseSuggestor
from codemods.file_query import FileQuery, PathFilter, is_js_file, is_python_file
from codemods.interactive import execute
from codemods.js_ts import RemoveConsoleSuggestor, RenameExportSuggestor
from codemods.python_libcst import (
    AddTypeHintsSuggestor,
    ConvertPrintToLoggingSuggestor,
    RenameSymbolSuggestor,
)
from codemods.runner import ExitCode, RunMode
from core.config import DEFAULT_CONFIG, Config, default_config_path, get_config, save_config


class CodemodGroup(TyperGroup):
    """Command group that exits with the usage code when the command line is malformed."""

    def main(self, *args, **kwargs):
        try:
            return super().main(*args, **kwargs)
        except SystemExit as e:
            # Standalone mode has already printed the usage error.
            if e.code == click.UsageError.exit_code:
                raise SystemExit(int(ExitCode.USAGE)) from e
            raise


app = typer.Typer(
    cls=CodemodGroup,
    add_completion=False,
    rich_markup_mode=None,
    pretty_exceptions_enable=False,
)

# name -> (suggestor class, files it applies to)
TRANSFORMS = {
    "rename_symbol": (RenameSymbolSuggestor, is_python_file),
    "convert_print_to_logging": (ConvertPrintToLoggingSuggestor, is_python_file),
    "add_type_hints": (AddTypeHintsSuggestor, is_python_file),
    "rename_export": (RenameExportSuggestor, is_js_file),
    "remove_console": (RemoveConsoleSuggestor, is_js_file),
}


@app.callback()
def callback():
    """Codemod - review and apply source transformations one patch at a time."""


def parse_params(params: List[str]) -> Dict[str, str]:
    """Parse ``key=value`` pairs given with ``--param``."""
    parsed = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got '{item}'", param_hint="--param")
        parsed[key.strip()] = value
    return parsed


def build_suggestor(transform: str, params: Dict[str, str]) -> BaseSuggestor:
    """Instantiate a built-in transform with its parameters."""
    if transform not in TRANSFORMS:
        raise typer.BadParameter(
            f"unknown transform '{transform}' (choose from {', '.join(sorted(TRANSFORMS))})",
            param_hint="TRANSFORM",
        )
    suggestor_class, _ = TRANSFORMS[transform]
    try:
        return suggestor_class(**params)
    except TypeError as e:
        raise typer.BadParameter(f"invalid parameters for {transform}: {e}", param_hint="--param") from e


def build_query(path: Path, path_filter: PathFilter, recursive: bool, config: Config) -> FileQuery:
    if path.is_file():
        return FileQuery.single(str(path))
    return FileQuery.dir(
        str(path),
        path_filter=path_filter,
        recursive=recursive,
        follow_links=config.files_follow_links,
        ignored_globs=config.files_ignored_globs,
    )


@app.command()
def transforms():
    """List the built-in transforms."""
    for name in sorted(TRANSFORMS):
        suggestor_class, _ = TRANSFORMS[name]
        summary = (suggestor_class.__doc__ or "").strip().splitlines()[0]
        typer.echo(f"{name:<28} {summary}")


@app.command()
def run(
    transform: str = typer.Argument(..., help="Built-in transform to apply (see `transforms`)"),
    path: Path = typer.Argument(Path("."), help="File or directory to run over"),
    param: List[str] = typer.Option([], "--param", "-p", help="Transform parameter as key=value"),
    recursive: bool = typer.Option(True, "--recursive/--no-recursive", help="Descend into subdirectories"),
    default_yes: Optional[bool] = typer.Option(None, "--default-yes/--default-no", help="What pressing enter means"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Outputs all logging to stdout/stderr."),
    yes_to_all: bool = typer.Option(False, "--yes-to-all", help="Accept every patch without prompting."),
    fail_on_changes: bool = typer.Option(
        False, "--fail-on-changes", help="Exit non-zero if there are changes to be made, without making them."
    ),
    stderr_assume_tty: bool = typer.Option(
        False, "--stderr-assume-tty", help="Forces ansi color highlighting of stderr."
    ),
):
    """Apply a built-in transform interactively."""
    try:
        suggestor = build_suggestor(transform, parse_params(param))
    except typer.BadParameter as e:
        typer.echo(f"Invalid codemod arguments: {e.format_message()}", err=True)
        raise typer.Exit(int(ExitCode.USAGE))

    config = get_config()
    _, path_filter = TRANSFORMS[transform]
    mode = RunMode(
        fail_on_changes=fail_on_changes,
        yes_to_all=yes_to_all,
        default_yes=config.prompt_default_yes if default_yes is None else default_yes,
        verbose=verbose,
        stderr_assume_tty=stderr_assume_tty,
    )
    exit_code = execute(build_query(path, path_filter, recursive, config), [suggestor], mode, config=config)
    raise typer.Exit(int(exit_code))


@app.command("init-config")
def init_config(force: bool = typer.Option(False, "--force", help="Overwrite an existing file")):
    """Write the default configuration to ~/.codemod.toml."""
    config_path = default_config_path()
    if config_path.exists() and not force:
        typer.echo(f"Config file already exists at {config_path} (use --force to overwrite)", err=True)
        raise typer.Exit(1)
    save_config(DEFAULT_CONFIG, config_path)
    typer.echo(f"Wrote {config_path}")


if __name__ == "__main__":
    app()
