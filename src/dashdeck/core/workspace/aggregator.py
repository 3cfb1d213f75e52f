"""
Workspace aggregator.

Loads every record in a workspace into typed models and assembles them
into a WorkspaceSnapshot. Nothing is cached: each call reads the files
again, so a snapshot always reflects what is on disk right now.
"""

import logging
from datetime import datetime, timezone

from dashdeck.core.workspace.layout import (
    PROJECT_META_FILE,
    PROJECT_SUMMARY_FILE,
    WorkspaceLayout,
    is_safe_id,
)
from dashdeck.core.workspace.loader import (
    list_dirs,
    list_files,
    load_record,
    read_json,
    read_text,
    validate_record,
)
from dashdeck.core.workspace.models import (
    Fact,
    GraphData,
    Project,
    Task,
    WorkspaceSnapshot,
)

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _newest_first(value: datetime | None) -> tuple[bool, datetime]:
    # Records without a timestamp sort after every dated record.
    return (value is not None, value or _OLDEST)


class WorkspaceAggregator:
    """
    Reads tasks, projects, facts and the graph from a workspace.

    Example:
        >>> aggregator = WorkspaceAggregator(WorkspaceLayout(Path("~/ws").expanduser()))
        >>> snapshot = aggregator.load_snapshot()
        >>> len(snapshot.tasks)
        12
    """

    def __init__(self, layout: WorkspaceLayout) -> None:
        self.layout = layout

    def load_all_tasks(self) -> list[Task]:
        """
        Load every task record.

        Returns:
            Tasks ordered by update time, most recent first. Tasks with the
            same update time keep file name order.
        """
        tasks: list[Task] = []
        for name in list_files(self.layout.tasks_dir, ".json"):
            task = load_record(self.layout.tasks_dir / name, Task)
            if task is not None:
                tasks.append(task)

        tasks.sort(key=lambda t: _newest_first(t.updated_at), reverse=True)
        return tasks

    def get_task(self, task_id: str) -> Task | None:
        """Load a single task by id, or None if no record backs it."""
        if not is_safe_id(task_id):
            return None
        return load_record(self.layout.task_file(task_id), Task)

    def get_project(self, project_id: str) -> Project | None:
        """
        Load a single project directory.

        Reads ``meta.json`` (required) and ``summary.md`` (optional) and
        annotates the result with the directory path. The directory name is
        used as the id and name when the metadata leaves them out.
        """
        if not is_safe_id(project_id):
            return None

        project_dir = self.layout.project_dir(project_id)
        meta_path = project_dir / PROJECT_META_FILE
        meta = read_json(meta_path)
        if meta is None:
            return None
        if isinstance(meta, dict):
            meta.setdefault("id", project_id)
            meta.setdefault("name", meta["id"])
            meta["path"] = str(project_dir)
            meta["summary"] = read_text(project_dir / PROJECT_SUMMARY_FILE)

        return validate_record(meta, Project, meta_path)

    def load_all_projects(self) -> list[Project]:
        """
        Load every project directory.

        Returns:
            Projects ordered by priority (urgent first), then by update
            time, most recent first
        """
        projects: list[Project] = []
        for name in list_dirs(self.layout.projects_dir):
            project = self.get_project(name)
            if project is not None:
                projects.append(project)

        projects.sort(key=lambda p: _newest_first(p.updated_at), reverse=True)
        projects.sort(key=lambda p: p.priority.rank)
        return projects

    def load_all_facts(self) -> list[Fact]:
        """Load every fact record, newest first."""
        facts: list[Fact] = []
        for name in list_files(self.layout.facts_dir, ".json"):
            fact = load_record(self.layout.facts_dir / name, Fact)
            if fact is not None:
                facts.append(fact)

        facts.sort(key=lambda f: _newest_first(f.created_at), reverse=True)
        return facts

    def load_graph(self) -> GraphData | None:
        """Load the graph snapshot, or None if there is none."""
        return load_record(self.layout.graph_file, GraphData)

    def load_snapshot(self) -> WorkspaceSnapshot:
        """Load everything in the workspace as one snapshot."""
        snapshot = WorkspaceSnapshot(
            tasks=self.load_all_tasks(),
            projects=self.load_all_projects(),
            facts=self.load_all_facts(),
            graph=self.load_graph(),
            loaded_at=datetime.now(timezone.utc),
        )
        logger.debug(
            "Loaded workspace %s: %d tasks, %d projects, %d facts",
            self.layout.root,
            len(snapshot.tasks),
            len(snapshot.projects),
            len(snapshot.facts),
        )
        return snapshot
