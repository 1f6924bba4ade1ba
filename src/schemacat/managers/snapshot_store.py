"""Durable per-project snapshot storage for schemacat."""

import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from schemacat.core.path_utils import (
    LATEST_FILENAME,
    ensure_directory,
    get_latest_path,
    get_project_dir,
    list_snapshot_files,
    snapshot_filename,
)
from schemacat.models import Snapshot
from schemacat.utils.name_validator import is_valid_name

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog storage errors."""

    pass


class SnapshotNotFoundError(CatalogError):
    """Raised when a project has no stored snapshot."""

    pass


class CatalogReadError(CatalogError):
    """Raised when the catalog cannot be read."""

    pass


class SnapshotWriteError(CatalogError):
    """Raised when a snapshot record cannot be written."""

    pass


class SnapshotSerializationError(CatalogError):
    """Raised when a snapshot cannot be encoded or decoded."""

    pass


class SnapshotStore:
    """Stores snapshots under a catalog root, one directory per project.

    Each save writes an immutable timestamp-named record and then replaces
    the project's ``schema-latest.json`` alias with the same content.
    """

    def __init__(self, catalog_root: Path):
        """Initialize snapshot store.

        Args:
            catalog_root: Directory holding all project catalogs
        """
        self.catalog_root = Path(catalog_root)

    def save(self, snapshot: Snapshot) -> Path:
        """Persist a snapshot and point the project's latest alias at it.

        Args:
            snapshot: Snapshot to store

        Returns:
            Path to the immutable record

        Raises:
            SnapshotSerializationError: If the snapshot cannot be encoded
            SnapshotWriteError: If either record cannot be written
        """
        project_dir = get_project_dir(self.catalog_root, snapshot.project)
        try:
            data = snapshot.model_dump_json(indent=2)
        except (ValueError, TypeError) as e:
            raise SnapshotSerializationError(
                f"Failed to encode snapshot for project '{snapshot.project}' during save: {e}"
            ) from e

        try:
            ensure_directory(project_dir)
        except OSError as e:
            raise SnapshotWriteError(
                f"Failed to create catalog directory {project_dir}: {e}"
            ) from e

        record_path = project_dir / snapshot_filename(snapshot.snapshot_time)
        try:
            # Exclusive create: an immutable record is never overwritten
            with open(record_path, "x", encoding="utf-8") as f:
                f.write(data)
        except OSError as e:
            raise SnapshotWriteError(
                f"Failed to write snapshot file {record_path}: {e}"
            ) from e

        latest_path = get_latest_path(self.catalog_root, snapshot.project)
        try:
            latest_path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise SnapshotWriteError(
                f"Failed to update latest snapshot for project '{snapshot.project}': {e}"
            ) from e

        logger.info(f"Saved snapshot for '{snapshot.project}' to {record_path}")
        return record_path

    def load_latest(self, project: str) -> Snapshot:
        """Load the most recently saved snapshot for a project.

        Raises:
            SnapshotNotFoundError: If the project has never been scanned
            SnapshotSerializationError: If the record cannot be decoded
        """
        latest_path = get_latest_path(self.catalog_root, project)
        if not latest_path.is_file():
            raise SnapshotNotFoundError(
                f"No snapshot found for project '{project}'"
            )
        return self._read(latest_path, project, "load latest")

    def load_history(self, project: str, skip_invalid: bool = False) -> List[Snapshot]:
        """Load every immutable snapshot of a project, oldest first.

        The latest alias is excluded since it duplicates the newest record.

        Args:
            project: Project name
            skip_invalid: Log and skip records that cannot be read or
                decoded instead of raising

        Raises:
            SnapshotSerializationError: If a record cannot be decoded and
                ``skip_invalid`` is False
            CatalogReadError: If a record cannot be read and
                ``skip_invalid`` is False
        """
        project_dir = get_project_dir(self.catalog_root, project)
        snapshots = []
        for path in list_snapshot_files(project_dir):
            try:
                snapshots.append(self._read(path, project, "load history"))
            except (CatalogReadError, SnapshotSerializationError) as e:
                if not skip_invalid:
                    raise
                logger.warning(f"Skipping snapshot record {path.name}: {e}")
        snapshots.sort(key=lambda s: s.snapshot_time)
        return snapshots

    def list_projects(self, missing_ok: bool = True) -> List[str]:
        """List projects with at least one stored snapshot.

        Args:
            missing_ok: Treat a missing catalog root as an empty catalog

        Returns:
            Sorted project names

        Raises:
            CatalogReadError: If the catalog root is unreadable, or missing
                and ``missing_ok`` is False
        """
        if not self.catalog_root.exists():
            if missing_ok:
                return []
            raise CatalogReadError(
                f"Failed to read catalog: {self.catalog_root} does not exist"
            )

        try:
            entries = list(self.catalog_root.iterdir())
        except OSError as e:
            raise CatalogReadError(f"Failed to read catalog: {e}") from e

        projects = []
        for entry in entries:
            if not entry.is_dir() or not is_valid_name(entry.name):
                continue
            if list_snapshot_files(entry) or (entry / LATEST_FILENAME).is_file():
                projects.append(entry.name)
        return sorted(projects)

    def has_project(self, project: str) -> bool:
        return get_latest_path(self.catalog_root, project).is_file()

    def _read(self, path: Path, project: str, operation: str) -> Snapshot:
        try:
            data = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogReadError(
                f"Failed to read {path} for project '{project}' during {operation}: {e}"
            ) from e

        try:
            snapshot = Snapshot.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotSerializationError(
                f"Failed to decode {path.name} for project '{project}' during {operation}: {e}"
            ) from e

        if not snapshot.verify_checksum():
            logger.warning(f"Checksum mismatch in {path} for project '{project}'")
        return snapshot
