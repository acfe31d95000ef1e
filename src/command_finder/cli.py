"""CLI entry point for command_finder.

Provides commands:
  - find: interactively pick a command and run it (default)
  - run: run a command by exact name
  - query: show how a query resolves, without running anything
  - rebuild: rebuild the command catalog
  - info: show catalog location and size
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from command_finder.app import Application
from command_finder.config_loader import load_config
from command_finder.constants import DEFAULT_CONFIG_PATH
from command_finder.exceptions import BuildFailedError, StoreUnavailableError
from command_finder.types import Config

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Find commands by name or documentation and run them",
    rich_markup_mode="rich",
)
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def build_application(config_path: str, db_path: Path | None) -> Application:
    config = load_config(config_path).apply(Config())
    if db_path is not None:
        config.storage_path = str(db_path)
    return Application(config=config)


def get_application(ctx: typer.Context) -> Application:
    """Return the Application built by the callback, initializing its catalog."""
    application: Application = ctx.obj
    try:
        application.initialize()
    except BuildFailedError as e:
        console.print(f"[red]Could not build the command catalog:[/red] {e}")
        raise typer.Exit(code=1)
    return application


@app.callback(invoke_without_command=True)
def app_callback(
    ctx: typer.Context,
    config_path: Annotated[
        str,
        typer.Option("--config", "-c", help="Path to the TOML config file"),
    ] = DEFAULT_CONFIG_PATH,
    db_path: Annotated[
        Path | None,
        typer.Option("--db", "-d", help="Catalog database path (overrides config)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Build the application shared by every subcommand."""
    setup_logging(verbose)
    ctx.obj = build_application(config_path, db_path)
    if ctx.invoked_subcommand is None:
        find(ctx)


@app.command()
def find(ctx: typer.Context) -> None:
    """Pick a command interactively and run it."""
    application = get_application(ctx)
    application.tui.show_banner(
        application.config.app_name,
        application.config.app_version,
        len(application.registry),
    )
    asyncio.run(application.invoke_interactive())


@app.command()
def run(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Exact command name")],
    args: Annotated[list[str] | None, typer.Argument(help="Arguments passed to the command")] = None,
) -> None:
    """Run a command by name."""
    application = get_application(ctx)
    ok = asyncio.run(application.run_command(name, " ".join(args or [])))
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def query(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Query text")] = "",
) -> None:
    """Show which commands a query resolves to."""
    application = get_application(ctx)
    try:
        resolution = application.query(text)
    except StoreUnavailableError as e:
        console.print(f"[red]Catalog unavailable:[/red] {e}")
        raise typer.Exit(code=1)

    if not resolution:
        console.print("[dim]No match.[/dim]")
        return

    table = Table(title=f"{len(resolution)} matches ({resolution.tier.value} tier)")
    table.add_column("Command", style="bold")
    table.add_column("Summary")
    for name in resolution.names:
        table.add_row(name, application.registry.documentation_first_line(name) or "")
    console.print(table)


@app.command()
def rebuild(ctx: typer.Context) -> None:
    """Rebuild the command catalog from the registered commands."""
    application: Application = ctx.obj
    try:
        count = application.initialize(force=True)
    except BuildFailedError as e:
        console.print(f"[red]Rebuild failed:[/red] {e}")
        raise typer.Exit(code=1)
    console.print(f"Indexed [bold]{count}[/bold] commands into {application.store.path}")


@app.command()
def info(ctx: typer.Context) -> None:
    """Show the catalog location and record count."""
    application = get_application(ctx)
    ok = asyncio.run(application.run_command("catalog-info"))
    if not ok:
        raise typer.Exit(code=1)


def main() -> None:
    app()
