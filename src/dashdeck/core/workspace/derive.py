"""
Derived views over a workspace snapshot.

Every function here is pure: it reads the snapshot it is given and
returns new values, with no I/O. Functions that depend on "today" take
the current time as an argument, and only its date is used.

Percentages are rounded half-up to an integer. A zero denominator gives
0%, never an error.
"""

from collections.abc import Iterable
from datetime import date, datetime

from dashdeck.core.workspace.models import (
    DashboardStats,
    Milestone,
    Priority,
    ProgressSummary,
    Project,
    ProjectStatus,
    Task,
    TaskStatus,
    WorkspaceSnapshot,
    project_ref,
)

HIGH_PRIORITIES = frozenset({Priority.HIGH, Priority.URGENT})


def today_of(now: datetime | date) -> date:
    """Calendar date of ``now``."""
    if isinstance(now, datetime):
        return now.date()
    return now


def percentage(part: int, whole: int) -> int:
    """
    Integer percentage rounded half-up.

    Example:
        >>> percentage(1, 8)
        13
        >>> percentage(0, 0)
        0
    """
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (whole * 2)


def _is_overdue(task: Task, today: date) -> bool:
    return task.due_date is not None and task.due_date < today and not task.is_done


def summarize_progress(tasks: Iterable[Task]) -> ProgressSummary:
    """Count tasks by status and compute the completion percentage."""
    total = completed = in_progress = todo = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.DONE:
            completed += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            in_progress += 1
        elif task.status == TaskStatus.TODO:
            todo += 1

    return ProgressSummary(
        total=total,
        completed=completed,
        in_progress=in_progress,
        todo=todo,
        percentage=percentage(completed, total),
    )


# ==============================================================================
# Task views
# ==============================================================================


def overdue_tasks(snapshot: WorkspaceSnapshot, now: datetime | date) -> list[Task]:
    """Tasks due before today that are not done."""
    today = today_of(now)
    return [t for t in snapshot.tasks if _is_overdue(t, today)]


def tasks_due_today(snapshot: WorkspaceSnapshot, now: datetime | date) -> list[Task]:
    """Tasks whose due date is exactly today, whatever their status."""
    today = today_of(now)
    return [t for t in snapshot.tasks if t.due_date == today]


def high_priority_tasks(snapshot: WorkspaceSnapshot) -> list[Task]:
    """High and urgent tasks that are not done."""
    return [t for t in snapshot.tasks if t.priority in HIGH_PRIORITIES and not t.is_done]


def tasks_by_status(snapshot: WorkspaceSnapshot, status: TaskStatus) -> list[Task]:
    return [t for t in snapshot.tasks if t.status == status]


def tasks_by_priority(snapshot: WorkspaceSnapshot, priority: Priority) -> list[Task]:
    return [t for t in snapshot.tasks if t.priority == priority]


def unassigned_tasks(snapshot: WorkspaceSnapshot) -> list[Task]:
    """Open tasks nobody is assigned to."""
    return [t for t in snapshot.tasks if not t.assigned_to and not t.is_done]


def tasks_for_project(snapshot: WorkspaceSnapshot, project_id: str) -> list[Task]:
    """Tasks whose project reference is exactly ``projects/{project_id}``."""
    ref = project_ref(project_id)
    return [t for t in snapshot.tasks if t.project_ref == ref]


def tasks_for_milestone(
    snapshot: WorkspaceSnapshot, project_id: str, milestone_id: str
) -> list[Task]:
    """Tasks of a project that reference the given milestone."""
    return [
        t for t in tasks_for_project(snapshot, project_id) if t.milestone_ref == milestone_id
    ]


def find_task(snapshot: WorkspaceSnapshot, task_id: str) -> Task | None:
    return next((t for t in snapshot.tasks if t.id == task_id), None)


# ==============================================================================
# Project views
# ==============================================================================


def find_project(snapshot: WorkspaceSnapshot, project_id: str) -> Project | None:
    return next((p for p in snapshot.projects if p.id == project_id), None)


def active_projects(snapshot: WorkspaceSnapshot) -> list[Project]:
    return [p for p in snapshot.projects if p.status == ProjectStatus.ACTIVE]


def project_progress(snapshot: WorkspaceSnapshot, project_id: str) -> ProgressSummary:
    """Completion summary over every task that belongs to a project."""
    return summarize_progress(tasks_for_project(snapshot, project_id))


def milestone_progress(snapshot: WorkspaceSnapshot, milestone: Milestone) -> ProgressSummary:
    """
    Completion summary over the tasks a milestone lists.

    Listed ids with no matching task in the snapshot are left out of both
    the count and the percentage. An id listed twice counts once.
    """
    by_id = {t.id: t for t in snapshot.tasks}
    listed = dict.fromkeys(milestone.tasks)
    return summarize_progress(by_id[task_id] for task_id in listed if task_id in by_id)


# ==============================================================================
# Stats
# ==============================================================================


def dashboard_stats(snapshot: WorkspaceSnapshot, now: datetime | date) -> DashboardStats:
    """Aggregate task, project and fact counts for the dashboard header."""
    today = today_of(now)
    stats = DashboardStats(
        total_tasks=len(snapshot.tasks),
        total_projects=len(snapshot.projects),
        total_facts=len(snapshot.facts),
    )

    status_fields = {
        TaskStatus.DONE: "completed_tasks",
        TaskStatus.IN_PROGRESS: "in_progress_tasks",
        TaskStatus.TODO: "todo_tasks",
        TaskStatus.BLOCKED: "blocked_tasks",
        TaskStatus.CANCELLED: "cancelled_tasks",
    }
    for task in snapshot.tasks:
        field = status_fields[task.status]
        setattr(stats, field, getattr(stats, field) + 1)
        if not task.is_done:
            if task.priority in HIGH_PRIORITIES:
                stats.high_priority_tasks += 1
            if task.priority == Priority.URGENT:
                stats.urgent_tasks += 1
            if not task.assigned_to:
                stats.unassigned_tasks += 1
        if _is_overdue(task, today):
            stats.overdue_tasks += 1
        if task.due_date == today:
            stats.due_today_tasks += 1

    project_fields = {
        ProjectStatus.ACTIVE: "active_projects",
        ProjectStatus.PAUSED: "paused_projects",
        ProjectStatus.ARCHIVED: "archived_projects",
        ProjectStatus.COMPLETED: "completed_projects",
    }
    for project in snapshot.projects:
        field = project_fields[project.status]
        setattr(stats, field, getattr(stats, field) + 1)

    stats.universal_facts = sum(1 for f in snapshot.facts if f.universal)
    return stats
