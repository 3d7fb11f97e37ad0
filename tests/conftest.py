"""Shared fixtures for codemod tests."""

import io
import re
from pathlib import Path
from typing import List

import pytest

from codemods.base import RegexSuggestor
from codemods.terminal import Terminal
from core.config import DEFAULT_CONFIG
from core.logging import logger

FILE_A = "a = 1\nb = 1\nc = 1\n"
FILE_B = "d = 1\ne = 1\nf = 1\n"


class ScriptedTerminal(Terminal):
    """Terminal that answers prompts from a script and captures all output."""

    def __init__(self, answers: List[str] = (), default_clear: bool = False):
        super().__init__(
            stdout=io.StringIO(),
            stderr=io.StringIO(),
            ansi=False,
            stderr_ansi=False,
            clear_screen=default_clear,
        )
        self.answers = list(answers)
        self.prompts = 0
        self.rejected = []

    def prompt(self, choices: str, default: str) -> str:
        while True:
            if not self.answers:
                raise AssertionError("prompted more often than scripted")
            self.prompts += 1
            answer = self.answers.pop(0)
            if answer == "":
                return default
            if answer in choices:
                return answer
            self.rejected.append(answer)

    @property
    def out(self) -> str:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()


class OneToTwoSuggestor(RegexSuggestor):
    """Replaces every standalone 1 with a 2."""

    pattern = re.compile(r"\b1\b")

    def generate_replacement(self, match):
        return "2"


class TwoToThreeSuggestor(RegexSuggestor):
    """Replaces every standalone 2 with a 3."""

    pattern = re.compile(r"\b2\b")

    def generate_replacement(self, match):
        return "3"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.codemod.toml."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def project(tmp_path) -> Path:
    """Two files with three suggested patches each."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.py").write_text(FILE_A)
    (root / "b.py").write_text(FILE_B)
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams that only live as long as one test."""
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
