"""List command for schemacat CLI."""

from rich.markup import escape
from rich.table import Table as RichTable

from schemacat.cli.utils import CLIContext, console, fail, success
from schemacat.managers.catalog_query import CatalogQuery
from schemacat.managers.snapshot_store import CatalogError


def execute_list(cli_ctx: CLIContext) -> None:
    """Print a summary of every cataloged project."""
    success("📚 Cataloged Projects")
    console.print()

    try:
        summaries = CatalogQuery(cli_ctx.store()).list_catalog()
    except CatalogError as e:
        fail(str(e))

    if not summaries:
        console.print("No projects cataloged yet.")
        console.print()
        console.print("Run 'schemacat scan <path>' to catalog a project.")
        return

    table = RichTable(title="Projects", title_justify="left")
    table.add_column("Project", style="yellow")
    table.add_column("Source", style="cyan")
    table.add_column("Tables", style="green", justify="right")
    table.add_column("Last Cataloged")
    table.add_column("Revision", style="dim")

    for summary in summaries:
        table.add_row(
            escape(summary.name),
            escape(summary.source),
            str(summary.table_count),
            summary.formatted_time(),
            summary.revision[:8] if summary.revision else "-",
        )

    console.print(table)
