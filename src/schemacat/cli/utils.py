"""Utility functions for CLI commands."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from schemacat.config import Config, Settings
from schemacat.managers.snapshot_store import SnapshotStore
from schemacat.models import Column

console = Console()
err_console = Console(stderr=True)


@dataclass
class CLIContext:
    """Resolved configuration shared by every command.

    Attributes:
        config: Config manager
        settings: Loaded settings
        catalog_root: Catalog directory in effect
    """

    config: Config
    settings: Settings
    catalog_root: Path

    def store(self) -> SnapshotStore:
        return SnapshotStore(self.catalog_root)


def configure_logging(verbose: bool = False) -> None:
    """Send schemacat log records to stderr through rich."""
    logger = logging.getLogger("schemacat")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_context(catalog_dir: Optional[Path] = None) -> CLIContext:
    """Load settings and resolve the catalog root.

    Args:
        catalog_dir: Catalog root from the command line, overriding settings

    Raises:
        typer.Exit: If the config file cannot be parsed
    """
    config = Config()
    try:
        settings = config.settings()
    except (OSError, ValueError) as e:
        console.print(f"[red]❌ Failed to load config {config.config_path}: {e}[/red]")
        raise typer.Exit(1)

    catalog_root = Path(catalog_dir) if catalog_dir else config.catalog_root(settings)
    return CLIContext(config=config, settings=settings, catalog_root=catalog_root)


def get_context(ctx: typer.Context) -> CLIContext:
    """Return the CLIContext stored by the main callback."""
    if not isinstance(ctx.obj, CLIContext):
        ctx.obj = build_context()
    return ctx.obj


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1.

    Raises:
        typer.Exit: Always
    """
    console.print(f"[red]❌ {escape(message)}[/red]")
    raise typer.Exit(1)


def heading(text: str) -> None:
    console.print(f"[bold cyan]{escape(text)}[/bold cyan]")


def success(text: str) -> None:
    console.print(f"[bold green]{escape(text)}[/bold green]")


def format_column(column: Column, style: str = "markers") -> str:
    """Format a column for display.

    Args:
        column: Column to render
        style: ``markers`` appends PK/UNIQUE/NOT NULL, ``pk`` appends only
            ``(PK)``, ``preview`` appends ``(PK)`` and ``, nullable``

    Returns:
        Escaped markup text
    """
    text = f"{column.name}: {column.type}"
    if style == "markers":
        markers = column.markers()
        if markers:
            text += " " + " ".join(markers)
    elif style == "pk":
        if column.primary_key:
            text += " (PK)"
    else:
        if column.primary_key:
            text += " (PK)"
        if column.nullable:
            text += ", nullable"
    return escape(text)
