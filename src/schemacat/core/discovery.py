"""Schema file discovery for schemacat."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

# Directories that are never descended into
IGNORED_DIRS = {"node_modules", "vendor", ".git", "target", "build", "dist"}

SCHEMA_EXTENSIONS = {".sql", ".prisma"}
SCHEMA_FILENAMES = {"schema.rb", "models.py"}
MIGRATION_DIRS = {"migrations", "migrate"}


class SourceType(str, Enum):
    """Kind of schema source a file holds."""

    SQL = "sql"
    PRISMA = "prisma"
    RUBY = "ruby"
    PYTHON = "python"
    UNKNOWN = "unknown"


_EXTENSION_TYPES = {
    ".sql": SourceType.SQL,
    ".prisma": SourceType.PRISMA,
    ".rb": SourceType.RUBY,
    ".py": SourceType.PYTHON,
}


def detect_source_type(path: Union[str, Path]) -> SourceType:
    """Classify a schema file by its extension."""
    return _EXTENSION_TYPES.get(Path(path).suffix.lower(), SourceType.UNKNOWN)


def is_schema_file(path: Union[str, Path]) -> bool:
    """Return True if a file looks like it holds schema definitions.

    Matches ``*.sql`` and ``*.prisma`` files, ``schema.rb`` and ``models.py``,
    and any file whose parent directory is ``migrations`` or ``migrate``.
    """
    path = Path(path)
    name = path.name.lower()
    if path.suffix.lower() in SCHEMA_EXTENSIONS or name in SCHEMA_FILENAMES:
        return True
    return path.parent.name.lower() in MIGRATION_DIRS


def _skip_unreadable(error: OSError) -> None:
    logger.debug(f"Skipping unreadable path {error.filename}: {error.strerror}")


def discover_schema_files(root: Union[str, Path]) -> List[Path]:
    """Find files under ``root`` likely to contain schema definitions.

    Build and vendor directories are pruned entirely. Unreadable paths are
    skipped without raising.

    Args:
        root: Directory to walk

    Returns:
        Sorted list of absolute file paths
    """
    root = Path(root).resolve()
    found: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip_unreadable):
        dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
        for filename in filenames:
            file_path = Path(dirpath) / filename
            if is_schema_file(file_path):
                found.append(file_path)

    logger.debug(f"Discovered {len(found)} schema file(s) under {root}")
    return sorted(found)
