"""hexstack new - Create a new project from a template."""

from typing import Iterable, List

import click
from rich.console import Console
from rich.panel import Panel

from hexstack.config import HexstackConfig, load_config
from hexstack.errors import PipelineError, ProjectNameError
from hexstack.pipeline import BuildPipeline, BuildSummary, ProjectSetup
from hexstack.process import SubprocessRunner
from hexstack.progress import TqdmProgress
from hexstack.registry.components import COMPONENTS
from hexstack.ui import THEME, Symbols
from hexstack.update import UPGRADE_COMMAND, UpdateCheckError, check_for_update
from hexstack.validator import validate_name

console = Console(theme=THEME)

# "full" selects every component
TEMPLATE_CHOICES = ["full", "ripress", "wynd"]
FRONTEND_CHOICES = ["react", "svelte", "none"]


def expand_template_choices(choices: Iterable[str]) -> List[str]:
    """Turn --template values into component ids."""
    components = []
    for choice in choices:
        choice = choice.lower()
        if choice == "full":
            components.extend(sorted(COMPONENTS))
        else:
            components.append(choice)
    return components


def _check_name(value: str) -> str:
    try:
        validate_name(value)
    except ProjectNameError as e:
        raise click.BadParameter(str(e))
    return value


def _validate_name_argument(ctx, param, value):
    if value is None:
        return None
    return _check_name(value)


@click.command()
@click.argument("name", required=False, callback=_validate_name_argument)
@click.option(
    "--template",
    "-t",
    "templates",
    multiple=True,
    type=click.Choice(TEMPLATE_CHOICES, case_sensitive=False),
    help="Component to include (repeatable; 'full' selects all)",
)
@click.option(
    "--frontend",
    "-f",
    type=click.Choice(FRONTEND_CHOICES, case_sensitive=False),
    help="Frontend framework",
)
@click.option(
    "--skip-update-check",
    is_flag=True,
    envvar="HEXSTACK_SKIP_UPDATE_CHECK",
    help="Do not check for a newer hexstack release",
)
def new_cmd(name, templates, frontend, skip_update_check):
    """Create a new project.

    NAME is the project directory name. Anything not given on the
    command line is asked for interactively.

    \b
    Examples:
      hexstack new my-app
      hexstack new my-app --template full
      hexstack new my-app -t ripress -t wynd --frontend react
      hexstack new my-app -t wynd -f none
    """
    config = load_config()

    if config.check_for_updates and not skip_update_check:
        _notify_update(config)

    if name is None:
        name = click.prompt(
            "What should the name of your project be",
            default="my-app",
            value_proc=_check_name,
        )

    if templates:
        components = expand_template_choices(templates)
    else:
        components = _prompt_components()

    if frontend is None:
        frontend = click.prompt(
            "Select the frontend you want",
            type=click.Choice(FRONTEND_CHOICES, case_sensitive=False),
            default="none",
        )

    console.print(Panel.fit(
        f"[title]hexstack new[/] - {Symbols.PACKAGE} Creating [primary]{name}[/]"
        + ("" if frontend.lower() == "none" else f" with {frontend.lower()} frontend"),
        border_style="blue",
    ))

    setup = ProjectSetup(name, components, frontend)
    pipeline = BuildPipeline(
        setup,
        runner=SubprocessRunner(),
        progress=TqdmProgress(),
        config=config,
    )

    try:
        summary = pipeline.build()
    except PipelineError as e:
        console.print(f"\n[error]{Symbols.FAILED} Error:[/] {e.step} failed")
        console.print(e.message, markup=False, highlight=False, soft_wrap=True)
        if e.cancelled:
            console.print("[warning]Cancelled.[/] Partially created files were left in place.")
            raise SystemExit(130)
        raise SystemExit(1)

    _print_summary(summary)


def _prompt_components() -> List[str]:
    """Ask which components to include."""
    available = ", ".join(sorted(COMPONENTS))
    answer = click.prompt(
        f"Select the components you want (comma-separated: {available}, or none)",
        default="ripress",
    )
    return [
        part.strip() for part in answer.split(",")
        if part.strip() and part.strip().lower() != "none"
    ]


def _notify_update(config: HexstackConfig) -> None:
    """Print a notice if a newer release exists."""
    try:
        info = check_for_update(config)
    except UpdateCheckError as e:
        console.print(f"[text.dim]Update check failed: {e}[/]")
        return

    if info.available:
        console.print(
            f"[warning]A new version of hexstack is available "
            f"({info.current} → {info.latest})[/]"
        )
        console.print(f"  Run [primary]{UPGRADE_COMMAND}[/] to update.\n")


def _print_summary(summary: BuildSummary) -> None:
    """Print next steps after creation."""
    console.print(
        f"\n{Symbols.PARTY} Project [primary]'{summary.project_name}'[/] created successfully!"
    )

    console.print("\n[bold]Next steps:[/]")
    for step in summary.next_steps:
        console.print(f"  {step}")

    if summary.components:
        console.print("\n[bold]Components added:[/]")
        for component_id, description in summary.components:
            console.print(f"  {Symbols.BULLET} {component_id} - {description}")

    if summary.unknown_components:
        skipped = ", ".join(summary.unknown_components)
        console.print(f"\n[warning]Unknown components ignored:[/] {skipped}")

    if summary.template_name:
        console.print(f"\nTemplate used: [accent]{summary.template_name}[/]")
    else:
        console.print("\n[text.dim]No specific template matched; created a default project.[/]")

    if summary.frontend:
        console.print(f"Frontend: [primary]{summary.frontend}[/]")
