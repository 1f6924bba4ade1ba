"""Tests for schemacat models."""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from schemacat.models import (
    ChangeKind,
    ChangeLevel,
    Column,
    SchemaChange,
    SchemaDiff,
    Snapshot,
    Table,
    compute_checksum,
)


class TestColumn:
    """Test Column model."""

    def test_defaults(self):
        """Test default column attributes."""
        col = Column(name="email", type="TEXT")
        assert col.nullable is True
        assert col.primary_key is False
        assert col.unique is False
        assert col.default is None

    def test_primary_key_cannot_be_nullable(self):
        """Test a nullable primary key is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Column(name="id", type="INT", primary_key=True)
        assert "cannot be nullable" in str(exc_info.value)

        col = Column(name="id", type="INT", primary_key=True, nullable=False)
        assert col.primary_key is True

    def test_extra_fields_forbidden(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Column(name="id", type="INT", colour="red")

    def test_markers(self):
        """Test display markers."""
        col = Column(name="id", type="INT", primary_key=True, nullable=False)
        assert col.markers() == ["PK", "NOT NULL"]
        col = Column(name="email", type="TEXT", unique=True)
        assert col.markers() == ["UNIQUE"]


class TestTable:
    """Test Table model."""

    def test_duplicate_columns_rejected(self):
        """Test column names must be unique."""
        with pytest.raises(ValidationError) as exc_info:
            Table(
                name="users",
                columns=[Column(name="id", type="INT"), Column(name="id", type="TEXT")],
            )
        assert "Duplicate column name" in str(exc_info.value)

    def test_column_lookup(self):
        """Test getting columns by name."""
        table = Table(
            name="users",
            columns=[Column(name="id", type="INT"), Column(name="email", type="TEXT")],
        )
        assert table.get_column("email").type == "TEXT"
        assert table.get_column("missing") is None
        assert list(table.column_map()) == ["id", "email"]


def make_tables(order):
    """Build a users table with columns in the given order."""
    columns = {
        "id": Column(name="id", type="INT", primary_key=True, nullable=False),
        "email": Column(name="email", type="TEXT", unique=True),
        "age": Column(name="age", type="INT"),
    }
    return {"users": Table(name="users", columns=[columns[n] for n in order])}


class TestSnapshot:
    """Test Snapshot model and checksum."""

    def test_checksum_is_hex_sha256(self):
        """Test checksum format."""
        checksum = compute_checksum(make_tables(["id", "email", "age"]))
        assert len(checksum) == 64
        int(checksum, 16)

    def test_checksum_ignores_column_order(self):
        """Test column declaration order does not change the checksum."""
        assert compute_checksum(make_tables(["id", "email", "age"])) == compute_checksum(
            make_tables(["age", "id", "email"])
        )

    def test_checksum_ignores_table_insertion_order(self):
        """Test table insertion order does not change the checksum."""
        a = Table(name="a", columns=[Column(name="x", type="INT")])
        b = Table(name="b", columns=[Column(name="y", type="INT")])
        assert compute_checksum({"a": a, "b": b}) == compute_checksum({"b": b, "a": a})

    def test_checksum_detects_changes(self):
        """Test a type change alters the checksum."""
        before = make_tables(["id", "age"])
        after = {
            "users": Table(
                name="users",
                columns=[
                    Column(name="id", type="INT", primary_key=True, nullable=False),
                    Column(name="age", type="BIGINT"),
                ],
            )
        }
        assert compute_checksum(before) != compute_checksum(after)

    def test_empty_checksum_is_stable(self):
        """Test the empty mapping has a fixed checksum."""
        assert compute_checksum({}) == compute_checksum({})

    def test_build(self):
        """Test building a snapshot fills in the checksum."""
        tables = make_tables(["id", "email"])
        snapshot = Snapshot.build(
            project="myapp", source="/src/myapp", tables=tables, revision="abc"
        )
        assert snapshot.checksum == compute_checksum(tables)
        assert snapshot.verify_checksum()
        assert snapshot.snapshot_time.tzinfo is not None
        assert snapshot.source_files == []

    def test_naive_time_becomes_utc(self):
        """Test naive timestamps are taken as UTC."""
        snapshot = Snapshot.build(
            project="myapp",
            source="/src",
            tables={},
            snapshot_time=datetime(2026, 1, 1, 12, 0, 0),
        )
        assert snapshot.snapshot_time == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)

    def test_json_round_trip(self):
        """Test a snapshot survives JSON serialization."""
        snapshot = Snapshot.build(
            project="myapp",
            source="/src/myapp",
            tables=make_tables(["id", "email", "age"]),
            source_files=["/src/myapp/schema.sql"],
        )
        restored = Snapshot.model_validate_json(snapshot.model_dump_json())
        assert restored == snapshot
        assert restored.verify_checksum()

    def test_tampered_snapshot_fails_verification(self):
        """Test verification detects edited tables."""
        snapshot = Snapshot.build(
            project="myapp", source="/src", tables=make_tables(["id"])
        )
        snapshot.tables["extra"] = Table(name="extra")
        assert not snapshot.verify_checksum()

    def test_table_helpers(self):
        """Test table lookup helpers."""
        tables = make_tables(["id"])
        tables["accounts"] = Table(name="accounts")
        snapshot = Snapshot.build(project="myapp", source="/src", tables=tables)
        assert snapshot.list_tables() == ["accounts", "users"]
        assert snapshot.has_table("users")
        assert snapshot.get_table("missing") is None

    def test_info(self):
        """Test snapshot metadata."""
        snapshot = Snapshot.build(
            project="myapp", source="/src", tables=make_tables(["id"]), revision="r1"
        )
        info = snapshot.info()
        assert info.project == "myapp"
        assert info.table_count == 1
        assert info.checksum == snapshot.checksum
        assert info.revision == "r1"


class TestSchemaChange:
    """Test change descriptors."""

    def test_table_descriptors(self):
        """Test table-level descriptors."""
        change = SchemaChange(
            kind=ChangeKind.ADDED, level=ChangeLevel.TABLE, table="orders"
        )
        assert change.description == "table: orders"
        assert change.entity == "orders"

    def test_column_descriptors(self):
        """Test column-level descriptors for each kind."""
        added = SchemaChange(
            kind=ChangeKind.ADDED,
            level=ChangeLevel.COLUMN,
            table="users",
            column="phone",
            new_type="TEXT",
        )
        modified = SchemaChange(
            kind=ChangeKind.MODIFIED,
            level=ChangeLevel.COLUMN,
            table="users",
            column="age",
            old_type="INT",
            new_type="BIGINT",
        )
        removed = SchemaChange(
            kind=ChangeKind.REMOVED,
            level=ChangeLevel.COLUMN,
            table="users",
            column="legacy",
            old_type="TEXT",
        )
        assert str(added) == "users.phone (TEXT)"
        assert str(modified) == "users.age (INT -> BIGINT)"
        assert str(removed) == "users.legacy"

    def test_empty_diff(self):
        """Test an empty diff reports no drift."""
        diff = SchemaDiff()
        assert not diff.has_drift
        assert diff.descriptions(ChangeKind.ADDED) == []
