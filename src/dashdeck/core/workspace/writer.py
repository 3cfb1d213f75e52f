"""
Task write-back.

Applies a single-field edit (status, priority or assignee) to one task
record and writes the whole record back to its file. Only the edited key
and ``updatedAt`` change; every other key in the stored JSON, including
keys the Task model does not know about, is written back as it was read.

There is no locking. Two edits to the same task race and the later
write wins.
"""

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dashdeck.core.workspace.layout import WorkspaceLayout, is_safe_id
from dashdeck.core.workspace.loader import read_json, validate_record
from dashdeck.core.workspace.models import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """
    Write a JSON document by replacing the target file.

    The document goes to a temporary file in the same directory first and
    is then renamed over the target, so readers see either the old or the
    new file, never a partial one.
    """
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp")

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


class TaskWriter:
    """
    Single-field task mutations.

    Each setter returns the updated Task, or None when no record backs the
    id. Nothing is written in the None case.

    Example:
        >>> writer = TaskWriter(layout)
        >>> task = writer.set_task_status("task-001", TaskStatus.DONE)
        >>> task.status if task else "not found"
        <TaskStatus.DONE: 'done'>
    """

    def __init__(
        self, layout: WorkspaceLayout, clock: Callable[[], datetime] = _utc_now
    ) -> None:
        self.layout = layout
        self.clock = clock

    def set_task_status(self, task_id: str, status: TaskStatus) -> Task | None:
        return self._update(task_id, "status", TaskStatus(status).value)

    def set_task_priority(self, task_id: str, priority: Priority) -> Task | None:
        return self._update(task_id, "priority", Priority(priority).value)

    def set_task_assignee(self, task_id: str, assignee: str | None) -> Task | None:
        """Assign a task, or unassign it when ``assignee`` is None."""
        return self._update(task_id, "assignedTo", assignee)

    def _update(self, task_id: str, key: str, value: Any) -> Task | None:
        if not is_safe_id(task_id):
            logger.info("Rejected task id %r", task_id)
            return None

        path = self.layout.task_file(task_id)
        record = read_json(path)
        if not isinstance(record, dict) or validate_record(record, Task, path) is None:
            return None

        record[key] = value
        record["updatedAt"] = self.clock().isoformat().replace("+00:00", "Z")

        updated = validate_record(record, Task, path)
        if updated is None:
            return None

        write_json_atomic(path, record)
        logger.debug("Set %s=%r on task %s", key, value, task_id)
        return updated
