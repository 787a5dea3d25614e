"""
CLI tool for the World Cup API.

Provides commands for serving the API and viewing the declared resources
with their filters and sort options.
"""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from worldcup_api.repositories.resources import ALL_RESOURCES
from worldcup_api.schemas.resources import LookupConfig

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="worldcup-cli",
    help="World Cup API CLI - Serve the API and inspect its resources",
    add_completion=False,
)
console = Console()


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """
    Run the API with uvicorn.

    Example:
        python cli.py serve --port 8080 --reload
    """
    import uvicorn

    uvicorn.run("worldcup_api:app", host=host, port=port, reload=reload)


@typer_app.command(name="resources")
def resources():
    """
    Display a table of every exposed resource.

    Shows the route, its filters with their match kind, and its sort keys.

    Example:
        python cli.py resources
    """
    console.print()
    console.print(
        Panel.fit(
            "[bold cyan]World Cup API Resources[/bold cyan]",
            border_style="cyan",
        )
    )
    console.print()

    table = Table(
        "URI",
        "Filters",
        "Sort by",
        title="Declared Resources",
        show_lines=True,
    )

    listings = 0
    for resource in ALL_RESOURCES:
        if isinstance(resource, LookupConfig):
            table.add_row(
                f"[green]{resource.uri}[/green]",
                f"[dim]lookup by {resource.param}[/dim]",
                "[dim]-[/dim]",
            )
            continue

        listings += 1
        filters = "\n".join(
            f"{rule.param} [dim]({rule.match.value})[/dim]"
            for rule in resource.filters
        ) or "[dim]-[/dim]"
        sort_keys = ", ".join(resource.sort_columns) or "[dim]-[/dim]"
        table.add_row(
            f"[green]{resource.uri}[/green]",
            filters,
            f"{sort_keys}\n[yellow]default: {resource.default_sort}[/yellow]",
        )

    console.print(table)
    console.print()
    console.print(
        f"[bold]Summary:[/bold] {listings} listings, "
        f"{len(ALL_RESOURCES) - listings} lookups"
    )
    console.print()


if __name__ == "__main__":
    typer_app()
