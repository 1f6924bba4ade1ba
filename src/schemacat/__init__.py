"""schemacat - Catalog database schemas across projects and detect drift."""

from schemacat.core.scanner import SchemaScanner, ScanResult
from schemacat.managers.snapshot_store import SnapshotStore
from schemacat.managers.diff_engine import DiffEngine, compare_snapshots
from schemacat.managers.catalog_query import CatalogQuery

try:
    from importlib.metadata import version
    __version__ = version("schemacat")
except Exception:
    # Package metadata is not available when running from a source tree
    __version__ = "0.1.0"

__all__ = [
    "SchemaScanner",
    "ScanResult",
    "SnapshotStore",
    "DiffEngine",
    "compare_snapshots",
    "CatalogQuery",
]
