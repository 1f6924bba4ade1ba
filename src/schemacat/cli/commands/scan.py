"""Scan command for schemacat CLI."""

from pathlib import Path

from rich.markup import escape

from schemacat.cli.utils import (
    CLIContext,
    console,
    fail,
    format_column,
    heading,
    success,
)
from schemacat.core.revision import git_revision
from schemacat.core.scanner import SchemaScanner
from schemacat.managers.snapshot_store import CatalogError
from schemacat.models import Snapshot
from schemacat.utils.name_validator import InvalidNameError

EXPECTED_PATTERNS = "*.sql, migrations/, *.prisma, models.py, schema.rb"


def display_snapshot(snapshot: Snapshot, preview_columns: int = 5) -> None:
    """Print a snapshot's tables with a preview of their columns."""
    heading("SCHEMA")
    console.print()
    console.print(f"Project: {escape(snapshot.project)}")
    console.print(f"Source: {escape(snapshot.source)}")
    console.print(f"Tables: {len(snapshot.tables)}")
    console.print()

    if not snapshot.tables:
        return

    heading("TABLES:")
    console.print()
    for name in snapshot.list_tables():
        table = snapshot.tables[name]
        console.print(
            f"  [yellow]{escape(name)}[/yellow] ({len(table.columns)} columns)"
        )
        for column in table.columns[:preview_columns]:
            console.print(f"    - {format_column(column, style='preview')}")
        hidden = len(table.columns) - preview_columns
        if hidden > 0:
            console.print(f"    ... and {hidden} more columns")
        console.print()


def execute_scan(cli_ctx: CLIContext, path: Path) -> None:
    """Scan a directory, display its schema and store the snapshot."""
    success("📚 Schema Catalog - Scan")
    console.print()

    scanner = SchemaScanner(revision_provider=git_revision)
    try:
        result = scanner.scan(path)
    except (FileNotFoundError, InvalidNameError) as e:
        fail(str(e))

    root = Path(result.snapshot.source)
    console.print(f"Scanning: {escape(str(root))}")
    console.print()

    if not result.found_files:
        console.print("No schema files found.")
        console.print()
        console.print(f"Looking for: {EXPECTED_PATTERNS}")
        return

    console.print(f"Found {len(result.files)} schema files:")
    for file_path in result.files:
        console.print(f"  - {escape(str(file_path.relative_to(root)))}")
    console.print()

    display_snapshot(result.snapshot, cli_ctx.settings.preview_columns)

    try:
        cli_ctx.store().save(result.snapshot)
    except (CatalogError, InvalidNameError) as e:
        fail(f"Failed to save snapshot: {e}")

    console.print()
    success("✓ Schema cataloged successfully")
