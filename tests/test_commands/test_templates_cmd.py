"""Tests for `hexstack templates` command and the CLI group."""

import pytest
from rich.console import Console

from hexstack import __version__
from hexstack.cli import main
from hexstack.ui import THEME


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep table cells on one line."""
    monkeypatch.setattr("hexstack.commands.templates.console", Console(theme=THEME, width=200))


class TestTemplatesCommand:
    """Tests for `hexstack templates`."""

    def test_lists_every_template(self, cli_runner):
        result = cli_runner.invoke(main, ["templates"])

        assert result.exit_code == 0
        for name in (
            "Ripress Basic",
            "Wynd Basic",
            "Ripress + Wynd",
            "Ripress + Wynd + React",
            "Wynd + Svelte",
        ):
            assert name in result.output

    def test_lists_components(self, cli_runner):
        result = cli_runner.invoke(main, ["templates"])

        assert "An Event Driven WebSocket library" in result.output


class TestMainGroup:
    """Tests for the top-level CLI group."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, cli_runner):
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "new" in result.output
        assert "templates" in result.output
