"""Build schema snapshots from project directories."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from schemacat.core.discovery import detect_source_type, discover_schema_files
from schemacat.core.extractor import extract_tables
from schemacat.core.path_utils import derive_project_name
from schemacat.core.revision import RevisionProvider, no_revision
from schemacat.models import Snapshot, Table

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of scanning a directory.

    Attributes:
        snapshot: Snapshot built from the discovered files
        files: Schema files that were discovered
        warnings: Per-file problems that were skipped
    """

    snapshot: Snapshot
    files: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def found_files(self) -> bool:
        return bool(self.files)


class SchemaScanner:
    """Discovers schema files in a directory and merges their tables."""

    def __init__(self, revision_provider: Optional[RevisionProvider] = None):
        """Initialize the scanner.

        Args:
            revision_provider: Callable returning the version-control revision
                of a path. Defaults to reporting no revision.
        """
        self.revision_provider = revision_provider or no_revision

    def scan(
        self, path: Union[str, Path], snapshot_time: Optional[datetime] = None
    ) -> ScanResult:
        """Scan a directory and build a snapshot of its schema.

        Files are processed in sorted order; when two files define the same
        table, the later file wins.

        Args:
            path: Directory to scan
            snapshot_time: Timestamp for the snapshot (default: now)

        Returns:
            ScanResult holding the snapshot, files and warnings

        Raises:
            FileNotFoundError: If the path does not exist
        """
        root = Path(path).resolve()
        if not root.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")

        files = discover_schema_files(root)
        tables: Dict[str, Table] = {}
        warnings: List[str] = []

        for file_path in files:
            try:
                content = file_path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                message = f"Failed to read {file_path}: {e}"
                logger.warning(message)
                warnings.append(message)
                continue

            for table in extract_tables(content, detect_source_type(file_path)):
                if table.name in tables:
                    logger.debug(f"Table '{table.name}' redefined in {file_path}")
                tables[table.name] = table

        snapshot = Snapshot.build(
            project=derive_project_name(root),
            source=str(root),
            tables=tables,
            source_files=[str(f) for f in files],
            revision=self.revision_provider(root),
            snapshot_time=snapshot_time,
        )
        logger.info(
            f"Scanned {root}: {len(files)} file(s), {len(tables)} table(s)"
        )
        return ScanResult(snapshot=snapshot, files=files, warnings=warnings)
