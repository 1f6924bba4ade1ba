"""End-to-end workflow through the Python API."""

import pytest
import tempfile
import shutil
from pathlib import Path

from schemacat import CatalogQuery, DiffEngine, SchemaScanner, SnapshotStore
from schemacat.models import ChangeKind


class TestFullWorkflow:
    """Scan, evolve, diff and query two projects."""

    @pytest.fixture
    def workspace(self):
        """Create two projects and a catalog root."""
        temp_dir = tempfile.mkdtemp()
        root = Path(temp_dir)
        (root / "billing" / "db" / "migrations").mkdir(parents=True)
        (root / "auth").mkdir()
        yield root
        shutil.rmtree(temp_dir)

    def test_catalog_lifecycle(self, workspace):
        """Test a schema evolving across scans."""
        billing = workspace / "billing"
        auth = workspace / "auth"
        store = SnapshotStore(workspace / "catalog")
        scanner = SchemaScanner()
        query = CatalogQuery(store)

        (billing / "db" / "migrations" / "001_init.sql").write_text(
            "CREATE TABLE users (id INT PRIMARY KEY, email TEXT);\n"
            "CREATE TABLE invoices (id INT PRIMARY KEY, amount DECIMAL(10, 2));\n"
        )
        (auth / "schema.sql").write_text(
            "CREATE TABLE users (id INT PRIMARY KEY, password_hash TEXT NOT NULL);"
        )
        # Dependencies must never be cataloged
        (auth / "node_modules" / "lib").mkdir(parents=True)
        (auth / "node_modules" / "lib" / "schema.sql").write_text(
            "CREATE TABLE vendored (id INT);"
        )

        first = scanner.scan(billing).snapshot
        store.save(first)
        store.save(scanner.scan(auth).snapshot)

        assert store.list_projects() == ["auth", "billing"]
        assert not store.load_latest("auth").has_table("vendored")

        # Evolve billing: widen a column and add a table
        (billing / "db" / "migrations" / "002_more.sql").write_text(
            "CREATE TABLE users (id INT PRIMARY KEY, email TEXT NOT NULL, name TEXT);\n"
            "CREATE TABLE payments (id INT PRIMARY KEY);\n"
        )
        current = scanner.scan(billing).snapshot

        diff = DiffEngine().compare(store.load_latest("billing"), current)
        assert diff.descriptions(ChangeKind.ADDED) == [
            "table: payments",
            "users.name (TEXT)",
        ]
        assert diff.descriptions(ChangeKind.MODIFIED) == ["users.email (TEXT -> TEXT)"]
        assert diff.removed == []

        store.save(current)

        # Latest reflects the second scan, history keeps both
        assert store.load_latest("billing").checksum == current.checksum
        assert len(store.load_history("billing")) == 2

        matches = query.find_table("users")
        assert [m.project for m in matches] == ["auth", "billing"]

        versions = query.table_history("users")
        assert [v.snapshot.project for v in versions].count("billing") == 2
        assert len(versions) == 3
        billing_versions = [v for v in versions if v.snapshot.project == "billing"]
        assert [len(v.table.columns) for v in billing_versions] == [2, 3]

        summaries = {s.name: s for s in query.list_catalog()}
        assert summaries["billing"].table_count == 3
        assert summaries["auth"].table_count == 1

    def test_unchanged_rescan_has_no_drift(self, workspace):
        """Test rescanning without edits reports no drift."""
        billing = workspace / "billing"
        (billing / "schema.sql").write_text("CREATE TABLE t (id INT, v TEXT);")
        store = SnapshotStore(workspace / "catalog")
        scanner = SchemaScanner()

        store.save(scanner.scan(billing).snapshot)
        again = scanner.scan(billing).snapshot

        previous = store.load_latest("billing")
        assert previous.checksum == again.checksum
        assert not DiffEngine().compare(previous, again).has_drift
