"""Drift models for schemacat."""

from enum import Enum
from typing import List, Optional
from pydantic import Field
from .base import SchemaCatBaseModel


class ChangeKind(str, Enum):
    """Classification of a structural change."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


class ChangeLevel(str, Enum):
    """Granularity of a structural change."""

    TABLE = "table"
    COLUMN = "column"


class SchemaChange(SchemaCatBaseModel):
    """A single table-level or column-level change between two snapshots."""

    kind: ChangeKind = Field(description="Added, modified or removed")
    level: ChangeLevel = Field(description="Whole table or single column")
    table: str = Field(description="Table name")
    column: Optional[str] = Field(default=None, description="Column name")
    old_type: Optional[str] = Field(default=None, description="Type before the change")
    new_type: Optional[str] = Field(default=None, description="Type after the change")

    @property
    def entity(self) -> str:
        """The changed entity: ``table`` or ``table.column``."""
        if self.level == ChangeLevel.TABLE:
            return self.table
        return f"{self.table}.{self.column}"

    @property
    def description(self) -> str:
        """Human-readable change descriptor."""
        if self.level == ChangeLevel.TABLE:
            return f"table: {self.table}"
        if self.kind == ChangeKind.ADDED:
            return f"{self.entity} ({self.new_type})"
        if self.kind == ChangeKind.MODIFIED:
            return f"{self.entity} ({self.old_type} -> {self.new_type})"
        return self.entity

    def __str__(self) -> str:
        return self.description


class SchemaDiff(SchemaCatBaseModel):
    """Structural differences between an old and a new snapshot."""

    added: List[SchemaChange] = Field(default_factory=list)
    modified: List[SchemaChange] = Field(default_factory=list)
    removed: List[SchemaChange] = Field(default_factory=list)

    @property
    def has_drift(self) -> bool:
        return bool(self.added or self.modified or self.removed)

    def descriptions(self, kind: ChangeKind) -> List[str]:
        """Return the descriptors for one kind of change, in order."""
        changes = {
            ChangeKind.ADDED: self.added,
            ChangeKind.MODIFIED: self.modified,
            ChangeKind.REMOVED: self.removed,
        }[ChangeKind(kind)]
        return [change.description for change in changes]
