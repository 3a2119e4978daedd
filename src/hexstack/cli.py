"""Main CLI entry point for hexstack."""

import logging

import click
from rich.logging import RichHandler

from hexstack import __version__
from hexstack.commands.new import new_cmd
from hexstack.commands.templates import templates_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )


@click.group()
@click.version_option(version=__version__, prog_name="hexstack")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose):
    """hexstack - Scaffold Rust web projects from prebuilt templates.

    \b
    Quick Start:
      hexstack new my-app                       Interactive setup
      hexstack new my-app --template full       Ripress + Wynd
      hexstack new my-app -t ripress -f react   Ripress with React frontend
      hexstack templates                        List templates
    """
    _configure_logging(verbose)


main.add_command(new_cmd, name="new")
main.add_command(templates_cmd, name="templates")


if __name__ == "__main__":
    main()
