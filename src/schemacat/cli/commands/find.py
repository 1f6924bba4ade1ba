"""Find command for schemacat CLI."""

from rich.markup import escape

from schemacat.cli.utils import CLIContext, console, fail, format_column, heading
from schemacat.managers.catalog_query import CatalogQuery
from schemacat.managers.snapshot_store import CatalogError


def execute_find(cli_ctx: CLIContext, table_name: str) -> None:
    """Print each project whose latest snapshot contains a table."""
    heading(f"Finding: {table_name}")
    console.print()

    try:
        matches = CatalogQuery(cli_ctx.store()).find_table(table_name)
    except CatalogError as e:
        fail(str(e))

    if not matches:
        console.print(
            f"Table '{escape(table_name)}' not found in any cataloged project"
        )
        return

    for match in matches:
        console.print(f"Project: [yellow]{escape(match.project)}[/yellow]")
        console.print(f"Source: {escape(match.snapshot.source)}")
        console.print(f"Last Updated: {match.snapshot.formatted_time()}")
        console.print(f"Columns: {len(match.table.columns)}")
        console.print()
        for column in match.table.columns:
            console.print(f"  - {format_column(column, style='pk')}")
        console.print()
