"""Shared test fixtures for hexstack.

Provides:
- fake_runner: CommandRunner that records calls and simulates git/cargo
- progress: RecordingProgress sink
- cli_runner: Click CliRunner
- no_update_check: disables the network version check for CLI tests
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from click.testing import CliRunner

from hexstack.process import CommandResult
from hexstack.progress import RecordingProgress


class FakeRunner:
    """Records commands and simulates their effect on disk.

    ``git clone URL DEST`` creates DEST with a ``.git`` directory (and a
    ``backend/`` directory when with_backend is set); ``cargo new NAME``
    creates NAME. Register failures with ``fail`` or exceptions with
    ``raise_on``.
    """

    def __init__(self, with_backend: bool = False):
        self.with_backend = with_backend
        self.calls: List[Tuple[str, List[str], Path, Optional[float]]] = []
        self._failures: Dict[Tuple[str, str], CommandResult] = {}
        self._errors: Dict[Tuple[str, str], Exception] = {}

    def fail(self, program: str, subcommand: str, stderr: str = "boom", returncode: int = 1):
        self._failures[(program, subcommand)] = CommandResult(
            success=False, returncode=returncode, stderr=stderr
        )

    def raise_on(self, program: str, subcommand: str, error: Exception):
        self._errors[(program, subcommand)] = error

    @property
    def commands(self) -> List[List[str]]:
        return [[program, *args] for program, args, _cwd, _timeout in self.calls]

    def run(self, program, args, working_dir, timeout=None):
        args = list(args)
        self.calls.append((program, args, Path(working_dir), timeout))
        key = (program, args[0] if args else "")

        if key in self._errors:
            raise self._errors[key]
        if key in self._failures:
            return self._failures[key]

        if key == ("git", "clone"):
            dest = Path(working_dir) / args[2]
            (dest / ".git").mkdir(parents=True)
            (dest / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
            (dest / "Cargo.toml").write_text("[package]\nname = \"template\"\n")
            if self.with_backend:
                (dest / "backend").mkdir()
        elif key == ("git", "init"):
            (Path(working_dir) / ".git").mkdir()
        elif key == ("cargo", "new"):
            (Path(working_dir) / args[1] / "src").mkdir(parents=True)

        return CommandResult(success=True)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_runner_with_backend():
    return FakeRunner(with_backend=True)


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def no_update_check(monkeypatch):
    monkeypatch.setenv("HEXSTACK_SKIP_UPDATE_CHECK", "1")


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point HEXSTACK_CONFIG at a file that does not exist yet."""
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setenv("HEXSTACK_CONFIG", str(config_file))
    return config_file
