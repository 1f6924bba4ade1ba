"""Table, Column, Index and ForeignKey models for schemacat."""

from typing import Dict, List, Optional
from pydantic import Field, field_validator, model_validator
from .base import SchemaCatBaseModel


class Column(SchemaCatBaseModel):
    """Represents a column extracted from a table definition."""

    name: str = Field(description="Column name")
    type: str = Field(description="Declared column type, as written in the source")
    nullable: bool = Field(
        default=True, description="Whether column allows NULL values"
    )
    primary_key: bool = Field(
        default=False, description="Whether this is a primary key"
    )
    unique: bool = Field(default=False, description="Whether values must be unique")
    default: Optional[str] = Field(
        default=None, description="Default value literal or expression text"
    )

    @model_validator(mode="after")
    def check_primary_key_not_nullable(self) -> "Column":
        """A primary key column can never be nullable."""
        if self.primary_key and self.nullable:
            raise ValueError(
                f"Column '{self.name}' is a primary key and cannot be nullable"
            )
        return self

    def markers(self) -> List[str]:
        """Return constraint markers for display (PK, UNIQUE, NOT NULL)."""
        markers = []
        if self.primary_key:
            markers.append("PK")
        if self.unique:
            markers.append("UNIQUE")
        if not self.nullable:
            markers.append("NOT NULL")
        return markers


class Index(SchemaCatBaseModel):
    """Represents a table index."""

    name: str = Field(description="Index name")
    columns: List[str] = Field(default_factory=list, description="Indexed columns")
    unique: bool = Field(default=False, description="Whether the index is unique")


class ForeignKey(SchemaCatBaseModel):
    """Represents a foreign key constraint."""

    column: str = Field(description="Referencing column")
    referenced_table: str = Field(description="Referenced table name")
    referenced_column: str = Field(description="Referenced column name")


class Table(SchemaCatBaseModel):
    """Represents a table definition.

    Columns keep declaration order for display. Indexes and foreign keys are
    carried through serialization even though no extractor fills them yet.
    """

    name: str = Field(description="Table name")
    columns: List[Column] = Field(default_factory=list, description="Table columns")
    indexes: List[Index] = Field(default_factory=list, description="Table indexes")
    foreign_keys: List[ForeignKey] = Field(
        default_factory=list, description="Foreign key constraints"
    )

    @field_validator("columns")
    @classmethod
    def validate_unique_column_names(cls, v: List[Column]) -> List[Column]:
        """Column names must be unique within a table."""
        seen = set()
        for column in v:
            if column.name in seen:
                raise ValueError(f"Duplicate column name '{column.name}'")
            seen.add(column.name)
        return v

    def column_map(self) -> Dict[str, Column]:
        """Return columns indexed by name."""
        return {column.name: column for column in self.columns}

    def get_column(self, name: str) -> Optional[Column]:
        """Get a column by name, or None if absent."""
        return self.column_map().get(name)
