"""
On-disk layout of a dashdeck workspace.

A workspace root holds:

    tasks/{id}.json                       one file per task
    memory/daily/{YYYY-MM-DD}.md          daily notes
    memory/facts/{id}.json                one file per fact
    life/areas/projects/{id}/meta.json    project metadata
    life/areas/projects/{id}/summary.md   optional project summary
    .openclaw/graph.json                  relationship graph snapshot
"""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_META_FILE = "meta.json"
PROJECT_SUMMARY_FILE = "summary.md"


@dataclass(frozen=True)
class WorkspaceLayout:
    """Resolves every workspace location from a single root directory."""

    root: Path

    @property
    def tasks_dir(self) -> Path:
        return self.root / "tasks"

    @property
    def daily_dir(self) -> Path:
        return self.root / "memory" / "daily"

    @property
    def facts_dir(self) -> Path:
        return self.root / "memory" / "facts"

    @property
    def projects_dir(self) -> Path:
        return self.root / "life" / "areas" / "projects"

    @property
    def meta_dir(self) -> Path:
        return self.root / ".openclaw"

    @property
    def graph_file(self) -> Path:
        return self.meta_dir / "graph.json"

    def task_file(self, task_id: str) -> Path:
        return self.tasks_dir / f"{task_id}.json"

    def project_dir(self, project_id: str) -> Path:
        return self.projects_dir / project_id

    def directories(self) -> list[Path]:
        """Directories that make up the workspace skeleton."""
        return [
            self.tasks_dir,
            self.daily_dir,
            self.facts_dir,
            self.projects_dir,
            self.meta_dir,
        ]


def is_safe_id(record_id: str) -> bool:
    """Check that a record id maps to a single file name inside its area."""
    if not record_id or record_id in (".", ".."):
        return False
    return "/" not in record_id and "\\" not in record_id


def ensure_workspace_layout(layout: WorkspaceLayout) -> list[Path]:
    """
    Create the workspace skeleton if it is missing.

    Idempotent and safe to call concurrently: directories that already
    exist are left alone.

    Args:
        layout: Workspace to prepare

    Returns:
        Directories that were created by this call
    """
    created: list[Path] = []
    for directory in layout.directories():
        if directory.is_dir():
            continue
        directory.mkdir(parents=True, exist_ok=True)
        created.append(directory)
        logger.debug("Created workspace directory %s", directory)
    return created
