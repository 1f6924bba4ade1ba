"""Schema snapshot model for tracking a project's table structure over time."""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator
from schemacat.models.base import SchemaCatBaseModel, TimestampedModel
from schemacat.models.table import Table


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _canonical_table(table: Table) -> Dict[str, Any]:
    return {
        "name": table.name,
        "columns": [
            col.model_dump() for col in sorted(table.columns, key=lambda c: c.name)
        ],
        "indexes": [
            idx.model_dump() for idx in sorted(table.indexes, key=lambda i: i.name)
        ],
        "foreign_keys": [
            fk.model_dump()
            for fk in sorted(
                table.foreign_keys,
                key=lambda f: (f.column, f.referenced_table, f.referenced_column),
            )
        ],
    }


def compute_checksum(tables: Dict[str, Table]) -> str:
    """Compute a SHA-256 checksum over a table mapping.

    Table names, column names, index names and foreign keys are sorted
    before encoding, so the result does not depend on the order in which
    files were read or columns were declared.

    Args:
        tables: Mapping of table name to Table

    Returns:
        Hex digest of the canonical JSON encoding
    """
    canonical = {name: _canonical_table(tables[name]) for name in sorted(tables)}
    payload = json.dumps(canonical, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class SnapshotInfo(TimestampedModel):
    """Snapshot metadata without the table mapping."""

    project: str
    source: str
    revision: Optional[str] = None
    checksum: str
    table_count: int = 0


class Snapshot(TimestampedModel):
    """A complete schema snapshot for a project.

    Stores the full table structure at a point in time, mapping table names
    to their definitions, along with the files that contributed to it.
    """

    project: str = Field(description="Project name")
    snapshot_time: datetime = Field(
        default_factory=_utc_now, description="When the snapshot was taken"
    )
    source: str = Field(description="Root path that was scanned")
    revision: Optional[str] = Field(
        default=None, description="Version-control revision of the source, if known"
    )
    checksum: str = Field(default="", description="Checksum over the table mapping")
    tables: Dict[str, Table] = Field(default_factory=dict)
    source_files: List[str] = Field(default_factory=list)

    @field_validator("snapshot_time")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def build(
        cls,
        project: str,
        source: str,
        tables: Dict[str, Table],
        source_files: Optional[List[str]] = None,
        revision: Optional[str] = None,
        snapshot_time: Optional[datetime] = None,
    ) -> "Snapshot":
        """Create a snapshot with its checksum filled in."""
        return cls(
            project=project,
            snapshot_time=snapshot_time or _utc_now(),
            source=source,
            revision=revision,
            checksum=compute_checksum(tables),
            tables=tables,
            source_files=source_files or [],
        )

    def info(self) -> SnapshotInfo:
        """Return the metadata of this snapshot."""
        return SnapshotInfo(
            project=self.project,
            snapshot_time=self.snapshot_time,
            source=self.source,
            revision=self.revision,
            checksum=self.checksum,
            table_count=len(self.tables),
        )

    def verify_checksum(self) -> bool:
        """Check the stored checksum against the table mapping."""
        return self.checksum == compute_checksum(self.tables)

    def has_table(self, table_name: str) -> bool:
        return table_name in self.tables

    def get_table(self, table_name: str) -> Optional[Table]:
        return self.tables.get(table_name)

    def list_tables(self) -> List[str]:
        """Get the table names in the snapshot, sorted."""
        return sorted(self.tables)


class ProjectSummary(SchemaCatBaseModel):
    """Summary of a cataloged project's latest snapshot."""

    name: str
    source: str
    table_count: int
    last_cataloged: datetime
    revision: Optional[str] = None

    def formatted_time(self) -> str:
        return self.last_cataloged.astimezone().strftime("%Y-%m-%d %H:%M:%S")


class TableMatch(SchemaCatBaseModel):
    """A table found in a project's latest snapshot."""

    project: str
    table: Table
    snapshot: SnapshotInfo


class TableVersion(SchemaCatBaseModel):
    """One historical version of a table."""

    snapshot: SnapshotInfo
    table: Table
