"""Configuration loading."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

import tomli_w

from core.logging import logger

CONFIG_FILENAME = ".codemod.toml"


@dataclass(frozen=True)
class Config:
    """Codemod run configuration."""
    # Prompt settings
    prompt_default_yes: bool
    prompt_clear_screen: bool
    # Diff rendering settings
    diff_context_lines: int
    diff_min_lines: int
    diff_fallback_lines: int
    diff_reserved_lines: int
    # File discovery settings
    files_follow_links: bool
    files_ignored_globs: List[str] = field(default_factory=list)


DEFAULT_CONFIG = Config(
    prompt_default_yes=False,
    prompt_clear_screen=True,
    diff_context_lines=2,
    diff_min_lines=5,
    diff_fallback_lines=10,
    diff_reserved_lines=10,
    files_follow_links=True,
    files_ignored_globs=["**/.git/**", "**/__pycache__/**", "**/node_modules/**", "**/.venv/**"],
)


def default_config_path() -> Path:
    """Location of the user configuration file."""
    return Path.home() / CONFIG_FILENAME


def config_from_dict(data: dict) -> Config:
    """Build a ``Config`` from parsed TOML, falling back to defaults per key."""
    prompt = data.get("prompt", {})
    diff = data.get("diff", {})
    files = data.get("files", {})
    return Config(
        prompt_default_yes=prompt.get("default_yes", DEFAULT_CONFIG.prompt_default_yes),
        prompt_clear_screen=prompt.get("clear_screen", DEFAULT_CONFIG.prompt_clear_screen),
        diff_context_lines=diff.get("context_lines", DEFAULT_CONFIG.diff_context_lines),
        diff_min_lines=diff.get("min_lines", DEFAULT_CONFIG.diff_min_lines),
        diff_fallback_lines=diff.get("fallback_lines", DEFAULT_CONFIG.diff_fallback_lines),
        diff_reserved_lines=diff.get("reserved_lines", DEFAULT_CONFIG.diff_reserved_lines),
        files_follow_links=files.get("follow_links", DEFAULT_CONFIG.files_follow_links),
        files_ignored_globs=files.get("ignored_globs", DEFAULT_CONFIG.files_ignored_globs),
    )


def get_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from ~/.codemod.toml if present, else use defaults.

    Args:
        path: Explicit configuration file to read instead of the default.

    Returns:
        The loaded configuration.
    """
    config_path = path or default_config_path()

    if not config_path.exists():
        return DEFAULT_CONFIG

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return DEFAULT_CONFIG

    return config_from_dict(data)


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    """
    Save configuration to ~/.codemod.toml.

    Args:
        config: The configuration to save.
        path: Explicit destination instead of the default.

    Returns:
        The path that was written.
    """
    config_path = path or default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {
        "prompt": {
            "default_yes": config.prompt_default_yes,
            "clear_screen": config.prompt_clear_screen,
        },
        "diff": {
            "context_lines": config.diff_context_lines,
            "min_lines": config.diff_min_lines,
            "fallback_lines": config.diff_fallback_lines,
            "reserved_lines": config.diff_reserved_lines,
        },
        "files": {
            "follow_links": config.files_follow_links,
            "ignored_globs": list(config.files_ignored_globs),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(config_dict, f)
    return config_path
