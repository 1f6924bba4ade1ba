"""Core data models for schemacat."""

from .base import SchemaCatBaseModel, TimestampedModel
from .table import Table, Column, Index, ForeignKey
from .snapshot import (
    Snapshot,
    SnapshotInfo,
    ProjectSummary,
    TableMatch,
    TableVersion,
    compute_checksum,
)
from .diff import SchemaChange, SchemaDiff, ChangeKind, ChangeLevel

__all__ = [
    "SchemaCatBaseModel",
    "TimestampedModel",
    "Table",
    "Column",
    "Index",
    "ForeignKey",
    "Snapshot",
    "SnapshotInfo",
    "ProjectSummary",
    "TableMatch",
    "TableVersion",
    "compute_checksum",
    "SchemaChange",
    "SchemaDiff",
    "ChangeKind",
    "ChangeLevel",
]
