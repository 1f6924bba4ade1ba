"""Structural comparison of schema snapshots."""

from typing import List
from schemacat.models import (
    ChangeKind,
    ChangeLevel,
    Column,
    SchemaChange,
    SchemaDiff,
    Snapshot,
    Table,
)


class DiffEngine:
    """Compares two snapshots and classifies their differences."""

    def __init__(self, compare_constraints: bool = False):
        """Initialize the diff engine.

        Args:
            compare_constraints: Also report primary key, unique and default
                changes as modifications. By default only type and
                nullability count as drift.
        """
        self.compare_constraints = compare_constraints

    def compare(self, old: Snapshot, new: Snapshot) -> SchemaDiff:
        """Compare an old snapshot against a new one.

        A table present only in ``new`` is reported once as added, without
        listing its columns; likewise for removed tables.

        Args:
            old: Previous snapshot
            new: Current snapshot

        Returns:
            SchemaDiff with each list sorted by description
        """
        added: List[SchemaChange] = []
        modified: List[SchemaChange] = []
        removed: List[SchemaChange] = []

        for table_name, new_table in new.tables.items():
            old_table = old.tables.get(table_name)
            if old_table is None:
                added.append(self._table_change(ChangeKind.ADDED, table_name))
                continue
            self._compare_columns(
                table_name, old_table, new_table, added, modified, removed
            )

        for table_name in old.tables:
            if table_name not in new.tables:
                removed.append(self._table_change(ChangeKind.REMOVED, table_name))

        return SchemaDiff(
            added=self._ordered(added),
            modified=self._ordered(modified),
            removed=self._ordered(removed),
        )

    def columns_differ(self, old_col: Column, new_col: Column) -> bool:
        """Check whether a column changed between snapshots."""
        if old_col.type != new_col.type or old_col.nullable != new_col.nullable:
            return True
        if self.compare_constraints:
            return (
                old_col.primary_key != new_col.primary_key
                or old_col.unique != new_col.unique
                or old_col.default != new_col.default
            )
        return False

    def _compare_columns(
        self,
        table_name: str,
        old_table: Table,
        new_table: Table,
        added: List[SchemaChange],
        modified: List[SchemaChange],
        removed: List[SchemaChange],
    ) -> None:
        old_cols = old_table.column_map()
        new_cols = new_table.column_map()

        for new_col in new_table.columns:
            old_col = old_cols.get(new_col.name)
            if old_col is None:
                added.append(
                    SchemaChange(
                        kind=ChangeKind.ADDED,
                        level=ChangeLevel.COLUMN,
                        table=table_name,
                        column=new_col.name,
                        new_type=new_col.type,
                    )
                )
            elif self.columns_differ(old_col, new_col):
                modified.append(
                    SchemaChange(
                        kind=ChangeKind.MODIFIED,
                        level=ChangeLevel.COLUMN,
                        table=table_name,
                        column=new_col.name,
                        old_type=old_col.type,
                        new_type=new_col.type,
                    )
                )

        for old_col in old_table.columns:
            if old_col.name not in new_cols:
                removed.append(
                    SchemaChange(
                        kind=ChangeKind.REMOVED,
                        level=ChangeLevel.COLUMN,
                        table=table_name,
                        column=old_col.name,
                        old_type=old_col.type,
                    )
                )

    @staticmethod
    def _table_change(kind: ChangeKind, table_name: str) -> SchemaChange:
        return SchemaChange(kind=kind, level=ChangeLevel.TABLE, table=table_name)

    @staticmethod
    def _ordered(changes: List[SchemaChange]) -> List[SchemaChange]:
        return sorted(changes, key=lambda c: c.description)


def compare_snapshots(old: Snapshot, new: Snapshot) -> SchemaDiff:
    """Compare two snapshots on type and nullability only."""
    return DiffEngine().compare(old, new)
