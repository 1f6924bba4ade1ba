"""schemacat managers."""

from schemacat.managers.snapshot_store import (
    SnapshotStore,
    CatalogError,
    CatalogReadError,
    SnapshotNotFoundError,
    SnapshotSerializationError,
    SnapshotWriteError,
)
from schemacat.managers.diff_engine import DiffEngine, compare_snapshots
from schemacat.managers.catalog_query import CatalogQuery

__all__ = [
    "SnapshotStore",
    "CatalogError",
    "CatalogReadError",
    "SnapshotNotFoundError",
    "SnapshotSerializationError",
    "SnapshotWriteError",
    "DiffEngine",
    "compare_snapshots",
    "CatalogQuery",
]
