"""Tests for hexstack.process module."""

import subprocess
import sys

import pytest

from hexstack.process import (
    CommandCancelledError,
    CommandError,
    CommandNotFoundError,
    CommandTimeoutError,
    SubprocessRunner,
    format_command,
)


class TestFormatCommand:
    """Tests for format_command()."""

    def test_plain(self):
        assert format_command("git", ["clone", "https://x/y", "app"]) == "git clone https://x/y app"

    def test_quotes_spaces(self):
        assert format_command("cargo", ["new", "my app"]) == "cargo new 'my app'"


class TestSubprocessRunner:
    """Tests for SubprocessRunner (runs the current Python interpreter)."""

    def test_success(self, tmp_path):
        result = SubprocessRunner().run(
            sys.executable, ["-c", "print('hello')"], tmp_path
        )
        assert result.success is True
        assert result.returncode == 0
        assert result.stdout.strip() == "hello"

    def test_failure_captures_stderr(self, tmp_path):
        result = SubprocessRunner().run(
            sys.executable,
            ["-c", "import sys; sys.stderr.write('bad things'); sys.exit(3)"],
            tmp_path,
        )
        assert result.success is False
        assert result.returncode == 3
        assert "bad things" in result.stderr

    def test_runs_in_working_dir(self, tmp_path):
        result = SubprocessRunner().run(
            sys.executable, ["-c", "import os; print(os.getcwd())"], tmp_path
        )
        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_not_found(self, tmp_path):
        with pytest.raises(CommandNotFoundError) as exc_info:
            SubprocessRunner().run("hexstack-no-such-program", ["--help"], tmp_path)
        assert "hexstack-no-such-program" in str(exc_info.value)

    def test_not_executable(self, tmp_path):
        tool = tmp_path / "tool"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(0o644)

        with pytest.raises(CommandError) as exc_info:
            SubprocessRunner().run(str(tool), [], tmp_path)

        assert not isinstance(exc_info.value, CommandNotFoundError)
        assert "Failed to start" in str(exc_info.value)
        assert exc_info.value.command == format_command(str(tool), [])

    def test_missing_working_dir(self, tmp_path):
        missing = tmp_path / "gone"

        with pytest.raises(CommandError) as exc_info:
            SubprocessRunner().run(sys.executable, ["-c", "pass"], missing)

        assert not isinstance(exc_info.value, CommandNotFoundError)
        assert str(missing) in str(exc_info.value)
        assert "not installed" not in str(exc_info.value)

    def test_timeout(self, tmp_path):
        with pytest.raises(CommandTimeoutError) as exc_info:
            SubprocessRunner().run(
                sys.executable, ["-c", "import time; time.sleep(10)"], tmp_path, timeout=0.2
            )
        assert exc_info.value.timeout == 0.2

    def test_default_timeout(self, tmp_path):
        runner = SubprocessRunner(default_timeout=0.2)
        with pytest.raises(CommandTimeoutError):
            runner.run(sys.executable, ["-c", "import time; time.sleep(10)"], tmp_path)

    def test_keyboard_interrupt_kills_child(self, tmp_path, monkeypatch):
        started = []

        def interrupted(self, *args, **kwargs):
            started.append(self)
            raise KeyboardInterrupt

        monkeypatch.setattr(subprocess.Popen, "communicate", interrupted)

        with pytest.raises(CommandCancelledError):
            SubprocessRunner().run(
                sys.executable, ["-c", "import time; time.sleep(10)"], tmp_path
            )

        assert len(started) == 1
        assert started[0].poll() is not None
