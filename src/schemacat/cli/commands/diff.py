"""Diff command for schemacat CLI."""

from pathlib import Path
from typing import Optional

from rich.markup import escape

from schemacat.cli.utils import CLIContext, console, fail, heading, success
from schemacat.core.path_utils import derive_project_name
from schemacat.core.scanner import SchemaScanner
from schemacat.managers.diff_engine import DiffEngine
from schemacat.managers.snapshot_store import CatalogError, SnapshotNotFoundError
from schemacat.models import ChangeKind, SchemaDiff
from schemacat.utils.name_validator import InvalidNameError

SECTIONS = [
    (ChangeKind.ADDED, "ADDED", "green", "+"),
    (ChangeKind.MODIFIED, "MODIFIED", "yellow", "~"),
    (ChangeKind.REMOVED, "REMOVED", "red", "-"),
]


def display_diff(diff: SchemaDiff) -> None:
    """Print drift grouped by kind, or a no-drift message."""
    if not diff.has_drift:
        success("✓ No drift detected - schemas match")
        return

    heading("DRIFT DETECTED:")
    console.print()
    for kind, title, color, symbol in SECTIONS:
        items = diff.descriptions(kind)
        if not items:
            continue
        console.print(f"[{color}]{title}:[/{color}]")
        for item in items:
            console.print(f"  {symbol} {escape(item)}")
        console.print()


def execute_diff(
    cli_ctx: CLIContext, path: Path, compare_constraints: Optional[bool] = None
) -> None:
    """Compare a directory's current schema with its latest stored snapshot."""
    success("📚 Schema Catalog - Diff")
    console.print()

    project = derive_project_name(path)
    try:
        last_snapshot = cli_ctx.store().load_latest(project)
    except (SnapshotNotFoundError, InvalidNameError):
        fail(f"no previous snapshot found for project '{project}'")
    except CatalogError as e:
        fail(f"Failed to load snapshot for project '{project}': {e}")

    console.print(f"Project: {escape(project)}")
    console.print(f"Last snapshot: {last_snapshot.formatted_time()}")
    console.print()

    try:
        current = SchemaScanner().scan(path).snapshot
    except FileNotFoundError as e:
        fail(str(e))

    if compare_constraints is None:
        compare_constraints = cli_ctx.settings.compare_constraints
    engine = DiffEngine(compare_constraints=compare_constraints)
    display_diff(engine.compare(last_snapshot, current))
