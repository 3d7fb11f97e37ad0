"""Interactive, reviewable codemods: suggest patches, review them, apply them."""

from .apply import apply_patches, apply_patches_and_save, write_atomic
from .base import AggregateSuggestor, BaseSuggestor, RegexSuggestor, Suggestor
from .errors import CodemodError, InputError, InvalidRange, OverlappingPatches, SuggestorError
from .file_query import FileQuery, has_extension, is_js_file, is_python_file
from .interactive import run_interactive_codemod, run_interactive_codemod_sequence
from .patch import Patch, to_plain_text
from .runner import CodemodRunner, Decision, ExitCode, RunMode, RunResult
from .source import SourceText
from .terminal import Terminal

__all__ = [
    "AggregateSuggestor",
    "BaseSuggestor",
    "CodemodError",
    "CodemodRunner",
    "Decision",
    "ExitCode",
    "FileQuery",
    "InputError",
    "InvalidRange",
    "OverlappingPatches",
    "Patch",
    "RegexSuggestor",
    "RunMode",
    "RunResult",
    "SourceText",
    "Suggestor",
    "SuggestorError",
    "Terminal",
    "apply_patches",
    "apply_patches_and_save",
    "has_extension",
    "is_js_file",
    "is_python_file",
    "run_interactive_codemod",
    "run_interactive_codemod_sequence",
    "to_plain_text",
    "write_atomic",
]
