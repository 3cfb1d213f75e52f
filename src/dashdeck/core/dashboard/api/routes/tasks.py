"""
Task API routes for the dashboard.

Provides the single write endpoint:
- PATCH /api/tasks - Change the status, priority or assignee of one task

Only one field changes per request. When several are supplied, status
wins over priority, and priority wins over assignee.
"""

from fastapi import APIRouter, Depends, HTTPException

from dashdeck.core.dashboard.api.deps import get_layout
from dashdeck.core.dashboard.models import TaskUpdateRequest
from dashdeck.core.workspace.layout import WorkspaceLayout
from dashdeck.core.workspace.models import Task
from dashdeck.core.workspace.writer import TaskWriter

router = APIRouter()


def apply_task_update(writer: TaskWriter, body: TaskUpdateRequest) -> Task | None:
    """
    Apply the highest-precedence edit in ``body``.

    Returns:
        Updated Task, or None if the task does not exist
    """
    if body.status is not None:
        return writer.set_task_status(body.task_id, body.status)
    if body.priority is not None:
        return writer.set_task_priority(body.task_id, body.priority)
    return writer.set_task_assignee(body.task_id, body.assigned_to)


@router.patch("/tasks", response_model=Task)
def update_task(
    body: TaskUpdateRequest,
    layout: WorkspaceLayout = Depends(get_layout),
) -> Task:
    """
    Update a single field of one task and return the stored result.

    Raises:
        HTTPException: 400 if no status, priority or assignee is supplied
        HTTPException: 404 if no task has the given id
        HTTPException: 500 if the task file cannot be written

    Example request:
        {"taskId": "task-001", "status": "done"}
    """
    if not body.has_update():
        raise HTTPException(status_code=400, detail="No valid update provided")

    try:
        updated = apply_task_update(TaskWriter(layout), body)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to update task", "details": str(e)},
        ) from e

    if updated is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated
