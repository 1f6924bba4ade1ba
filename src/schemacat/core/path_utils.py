"""Path utilities for the schemacat catalog."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Union
from schemacat.utils.name_validator import clean_name, validate_name

SNAPSHOT_PREFIX = "schema-"
SNAPSHOT_SUFFIX = ".json"
LATEST_FILENAME = f"{SNAPSHOT_PREFIX}latest{SNAPSHOT_SUFFIX}"
SNAPSHOT_GLOB = f"{SNAPSHOT_PREFIX}*{SNAPSHOT_SUFFIX}"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S-%f"


def derive_project_name(path: Union[str, Path]) -> str:
    """Derive a project name from the final component of a directory path.

    Args:
        path: Scanned directory

    Returns:
        Project name (not disambiguated between directories sharing a name)
    """
    return clean_name(Path(path).resolve().name)


def get_project_dir(catalog_root: Path, project: str) -> Path:
    """Get path to a project's catalog directory.

    Args:
        catalog_root: Catalog root directory
        project: Project name

    Returns:
        Path to project directory

    Raises:
        InvalidNameError: If the project name contains path traversal characters
    """
    validate_name(project, "project")
    return Path(catalog_root) / project


def snapshot_filename(snapshot_time: datetime) -> str:
    """Return the immutable record file name for a snapshot time.

    The timestamp is rendered in UTC so names sort chronologically.
    """
    stamp = snapshot_time.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
    return f"{SNAPSHOT_PREFIX}{stamp}{SNAPSHOT_SUFFIX}"


def get_latest_path(catalog_root: Path, project: str) -> Path:
    """Get path to a project's latest alias record."""
    return get_project_dir(catalog_root, project) / LATEST_FILENAME


def is_latest_record(path: Path) -> bool:
    return path.name == LATEST_FILENAME


def list_snapshot_files(project_dir: Path) -> List[Path]:
    """List a project's immutable snapshot records, excluding the latest alias.

    Args:
        project_dir: Project catalog directory

    Returns:
        Sorted list of record paths
    """
    return sorted(
        p
        for p in Path(project_dir).glob(SNAPSHOT_GLOB)
        if p.is_file() and not is_latest_record(p)
    )


def ensure_directory(path: Path) -> None:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    path.mkdir(parents=True, exist_ok=True)
