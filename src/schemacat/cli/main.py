"""Main CLI entry point for schemacat."""

import typer
from typing import Optional
from pathlib import Path

from schemacat.cli.utils import build_context, configure_logging, console, get_context

app = typer.Typer(
    name="schemacat",
    help="schemacat - Track database schemas across projects",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    catalog_dir: Optional[Path] = typer.Option(
        None,
        "--catalog-dir",
        "-c",
        help="Catalog directory (default: from config, SCHEMACAT_CATALOG_DIR or ~/.schemacat/catalog)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    schemacat - Track database schemas across projects
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        console.print(ctx.get_help())
        raise typer.Exit(0)
    if ctx.invoked_subcommand not in ("init", "version"):
        ctx.obj = build_context(catalog_dir)


@app.command()
def scan(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan"),
):
    """Discover and catalog schemas."""
    from schemacat.cli.commands.scan import execute_scan

    execute_scan(get_context(ctx), path)


@app.command()
def diff(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to compare"),
    constraints: Optional[bool] = typer.Option(
        None,
        "--constraints/--no-constraints",
        help="Also compare primary key, unique and default (default: from config)",
    ),
):
    """Compare current schema against the last snapshot."""
    from schemacat.cli.commands.diff import execute_diff

    execute_diff(get_context(ctx), path, constraints)


@app.command()
def history(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
):
    """Show evolution of a specific table."""
    from schemacat.cli.commands.history import execute_history

    execute_history(get_context(ctx), table)


@app.command()
def find(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
):
    """Find a table across all cataloged projects."""
    from schemacat.cli.commands.find import execute_find

    execute_find(get_context(ctx), table)


@app.command(name="list")
def list_projects(ctx: typer.Context):
    """List all cataloged projects."""
    from schemacat.cli.commands.catalog import execute_list

    execute_list(get_context(ctx))


@app.command()
def init():
    """Write a default configuration file."""
    from schemacat.config import Config

    config = Config()
    try:
        config.init()
        typer.secho(
            f"✅ Wrote default config to {config.config_path}", fg=typer.colors.GREEN
        )
    except FileExistsError:
        typer.secho(
            f"❌ Config already exists at {config.config_path}", fg=typer.colors.RED
        )
        raise typer.Exit(1)


@app.command()
def version():
    """Show schemacat version."""
    from schemacat import __version__

    typer.echo(f"schemacat version {__version__}")


if __name__ == "__main__":
    app()
