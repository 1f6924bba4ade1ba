"""Cross-project queries over the snapshot catalog."""

import logging
from typing import List

from schemacat.managers.snapshot_store import (
    CatalogError,
    SnapshotStore,
)
from schemacat.models import ProjectSummary, TableMatch, TableVersion

logger = logging.getLogger(__name__)


class CatalogQuery:
    """Answers questions that span every cataloged project.

    A project whose records cannot be loaded is logged and skipped so one
    damaged catalog entry does not hide the others.
    """

    def __init__(self, store: SnapshotStore):
        """Initialize catalog query.

        Args:
            store: Snapshot store to read from
        """
        self.store = store

    def find_table(self, table_name: str) -> List[TableMatch]:
        """Find a table in every project's latest snapshot.

        Args:
            table_name: Table to look for

        Returns:
            Matches ordered by project name; empty if none

        Raises:
            CatalogReadError: If the catalog root is missing or unreadable
        """
        matches: List[TableMatch] = []
        for project in self.store.list_projects(missing_ok=False):
            try:
                snapshot = self.store.load_latest(project)
            except CatalogError as e:
                logger.warning(f"Skipping project '{project}': {e}")
                continue

            table = snapshot.get_table(table_name)
            if table is not None:
                matches.append(
                    TableMatch(project=project, table=table, snapshot=snapshot.info())
                )
        return matches

    def table_history(self, table_name: str) -> List[TableVersion]:
        """Collect every stored version of a table across all projects.

        Args:
            table_name: Table to trace

        Returns:
            Versions in ascending snapshot time across all projects

        Raises:
            CatalogReadError: If the catalog root is missing or unreadable
        """
        versions: List[TableVersion] = []
        for project in self.store.list_projects(missing_ok=False):
            try:
                snapshots = self.store.load_history(project, skip_invalid=True)
            except CatalogError as e:
                logger.warning(f"Skipping project '{project}': {e}")
                continue

            for snapshot in snapshots:
                table = snapshot.get_table(table_name)
                if table is not None:
                    versions.append(TableVersion(snapshot=snapshot.info(), table=table))

        versions.sort(key=lambda v: v.snapshot.snapshot_time)
        return versions

    def list_catalog(self) -> List[ProjectSummary]:
        """Summarize the latest snapshot of every cataloged project.

        Returns:
            Summaries ordered by project name; empty if the catalog root
            does not exist yet

        Raises:
            CatalogReadError: If the catalog root exists but is unreadable
        """
        summaries: List[ProjectSummary] = []
        for project in self.store.list_projects(missing_ok=True):
            try:
                snapshot = self.store.load_latest(project)
            except CatalogError as e:
                logger.warning(f"Skipping project '{project}': {e}")
                continue

            summaries.append(
                ProjectSummary(
                    name=snapshot.project,
                    source=snapshot.source,
                    table_count=len(snapshot.tables),
                    last_cataloged=snapshot.snapshot_time,
                    revision=snapshot.revision,
                )
            )
        return summaries
