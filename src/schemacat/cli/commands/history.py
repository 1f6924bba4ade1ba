"""History command for schemacat CLI."""

from rich.markup import escape

from schemacat.cli.utils import CLIContext, console, fail, format_column, heading
from schemacat.managers.catalog_query import CatalogQuery
from schemacat.managers.snapshot_store import CatalogError


def execute_history(cli_ctx: CLIContext, table_name: str) -> None:
    """Print every stored version of a table across all projects."""
    heading(f"History: {table_name}")
    console.print()

    try:
        versions = CatalogQuery(cli_ctx.store()).table_history(table_name)
    except CatalogError as e:
        fail(str(e))

    if not versions:
        console.print(
            f"Table '{escape(table_name)}' not found in any cataloged project"
        )
        return

    for version in versions:
        console.print(
            f"{version.snapshot.formatted_time()} ({escape(version.snapshot.project)})"
        )
        console.print(f"  Columns: {len(version.table.columns)}")
        for column in version.table.columns:
            console.print(f"    - {format_column(column)}")
        console.print()
