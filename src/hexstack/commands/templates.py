"""hexstack templates - List available project templates."""

import click
from rich.console import Console
from rich.table import Table

from hexstack.registry.components import COMPONENTS
from hexstack.registry.templates import TEMPLATES
from hexstack.resolver import CANDIDATES
from hexstack.ui import THEME

console = Console(theme=THEME)


@click.command()
def templates_cmd():
    """List the templates hexstack can create projects from.

    Templates are shown in the order they are tried for each frontend.
    """
    console.print("\n[bold]Available Templates[/]\n")

    table = Table()
    table.add_column("Template", style="accent")
    table.add_column("Components")
    table.add_column("Frontend")
    table.add_column("Repository", style="text.dim")

    for frontend, candidates in CANDIDATES.items():
        for key, _required in candidates:
            template = TEMPLATES[key]
            table.add_row(
                template.name,
                ", ".join(sorted(template.components)),
                frontend.value if frontend else "none",
                template.github_url,
            )

    console.print(table)

    console.print("\n[bold]Components:[/]")
    for component_id, descriptor in sorted(COMPONENTS.items()):
        console.print(f"  [primary]{component_id}[/]  {descriptor.description}")

    console.print("\n[bold]Usage:[/]")
    console.print("  hexstack new my-app --template full --frontend react")
    console.print("  hexstack new my-app -t ripress -f none")
