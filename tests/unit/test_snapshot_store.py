"""Tests for SnapshotStore."""

import json
import logging
import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import tempfile
import shutil
from schemacat.core.path_utils import LATEST_FILENAME
from schemacat.managers.snapshot_store import (
    CatalogReadError,
    SnapshotNotFoundError,
    SnapshotSerializationError,
    SnapshotStore,
    SnapshotWriteError,
)
from schemacat.models import Column, Snapshot, Table
from schemacat.utils.name_validator import InvalidNameError

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_snapshot(project="myapp", minutes=0, columns=("id",), table="users"):
    """Build a snapshot of one table at BASE_TIME plus some minutes."""
    tables = {
        table: Table(
            name=table, columns=[Column(name=c, type="INT") for c in columns]
        )
    }
    return Snapshot.build(
        project=project,
        source=f"/src/{project}",
        tables=tables,
        snapshot_time=BASE_TIME + timedelta(minutes=minutes),
    )


class TestSnapshotStore:
    """Test snapshot persistence."""

    @pytest.fixture
    def temp_catalog(self):
        """Create a temporary catalog root."""
        temp = tempfile.mkdtemp()
        yield Path(temp) / "catalog"
        shutil.rmtree(temp)

    @pytest.fixture
    def store(self, temp_catalog):
        """Create a store over the temporary catalog."""
        return SnapshotStore(temp_catalog)

    def test_save_creates_record_and_latest(self, store, temp_catalog):
        """Test saving writes an immutable record and the latest alias."""
        record = store.save(make_snapshot())

        project_dir = temp_catalog / "myapp"
        assert record == project_dir / "schema-2026-01-01-120000-000000.json"
        assert record.is_file()
        assert (project_dir / LATEST_FILENAME).read_text() == record.read_text()

        data = json.loads(record.read_text())
        assert data["project"] == "myapp"
        assert "users" in data["tables"]

    def test_round_trip(self, store):
        """Test a saved snapshot loads back equal."""
        snapshot = make_snapshot(columns=("id", "email"))
        store.save(snapshot)
        loaded = store.load_latest("myapp")
        assert loaded == snapshot
        assert loaded.checksum == snapshot.checksum

    def test_latest_tracks_newest_save(self, store):
        """Test the latest alias follows each save."""
        store.save(make_snapshot(minutes=0, columns=("id",)))
        store.save(make_snapshot(minutes=5, columns=("id", "email")))

        latest = store.load_latest("myapp")
        assert [c.name for c in latest.tables["users"].columns] == ["id", "email"]

    def test_history_excludes_latest_and_is_ordered(self, store):
        """Test history lists each record once, oldest first."""
        store.save(make_snapshot(minutes=10))
        store.save(make_snapshot(minutes=0))
        store.save(make_snapshot(minutes=5))

        history = store.load_history("myapp")
        assert len(history) == 3
        assert [s.snapshot_time for s in history] == [
            BASE_TIME,
            BASE_TIME + timedelta(minutes=5),
            BASE_TIME + timedelta(minutes=10),
        ]

    def test_history_with_corrupt_record(self, store):
        """Test a damaged record raises by default and is skipped on request."""
        oldest = store.save(make_snapshot(minutes=0))
        store.save(make_snapshot(minutes=5))
        store.save(make_snapshot(minutes=10))
        oldest.write_text("{not json")

        with pytest.raises(SnapshotSerializationError):
            store.load_history("myapp")

        history = store.load_history("myapp", skip_invalid=True)
        assert [s.snapshot_time for s in history] == [
            BASE_TIME + timedelta(minutes=5),
            BASE_TIME + timedelta(minutes=10),
        ]

    def test_history_unknown_project(self, store):
        """Test an unknown project has an empty history."""
        assert store.load_history("nobody") == []

    def test_records_are_immutable(self, store):
        """Test a second save at the same instant does not overwrite."""
        store.save(make_snapshot(columns=("id",)))
        with pytest.raises(SnapshotWriteError):
            store.save(make_snapshot(columns=("id", "email")))

        history = store.load_history("myapp")
        assert len(history) == 1
        assert [c.name for c in history[0].tables["users"].columns] == ["id"]

    def test_load_latest_missing(self, store):
        """Test loading a project that was never scanned."""
        with pytest.raises(SnapshotNotFoundError):
            store.load_latest("nobody")

    def test_invalid_project_name(self, store):
        """Test project names cannot escape the catalog root."""
        with pytest.raises(InvalidNameError):
            store.load_latest("../etc")
        with pytest.raises(InvalidNameError):
            store.save(make_snapshot(project=".."))

    def test_corrupt_record(self, store, temp_catalog):
        """Test unreadable JSON raises a serialization error."""
        store.save(make_snapshot())
        (temp_catalog / "myapp" / LATEST_FILENAME).write_text("{not json")

        with pytest.raises(SnapshotSerializationError) as exc_info:
            store.load_latest("myapp")
        assert "myapp" in str(exc_info.value)

    def test_checksum_mismatch_is_logged(self, store, temp_catalog, caplog):
        """Test an edited record still loads but is reported."""
        store.save(make_snapshot())
        latest = temp_catalog / "myapp" / LATEST_FILENAME
        data = json.loads(latest.read_text())
        data["tables"]["users"]["columns"][0]["type"] = "BIGINT"
        latest.write_text(json.dumps(data))

        with caplog.at_level(logging.WARNING, logger="schemacat"):
            loaded = store.load_latest("myapp")

        assert loaded.tables["users"].columns[0].type == "BIGINT"
        assert "Checksum mismatch" in caplog.text

    def test_list_projects(self, store, temp_catalog):
        """Test listing cataloged projects."""
        store.save(make_snapshot(project="zeta"))
        store.save(make_snapshot(project="alpha"))
        (temp_catalog / "empty-dir").mkdir()
        (temp_catalog / "stray.txt").write_text("not a project")

        assert store.list_projects() == ["alpha", "zeta"]
        assert store.has_project("alpha")
        assert not store.has_project("empty-dir")

    def test_list_projects_missing_root(self, store):
        """Test a missing catalog root."""
        assert store.list_projects() == []
        with pytest.raises(CatalogReadError):
            store.list_projects(missing_ok=False)

    def test_list_projects_root_is_file(self, temp_catalog):
        """Test a catalog root that is not a directory."""
        temp_catalog.parent.mkdir(parents=True, exist_ok=True)
        temp_catalog.write_text("oops")
        with pytest.raises(CatalogReadError):
            SnapshotStore(temp_catalog).list_projects()
