"""
HTTP client for a running dashdeck API.

DashboardClient keeps a local copy of the last GET /api/data payload.
Nothing is fetched until refresh() is called; the copy only changes on
refresh() or when one of the task mutations succeeds. Derived views are
computed from the local copy with the same functions the server uses.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

import httpx

from dashdeck.core.dashboard.models import DashboardData
from dashdeck.core.notes.models import DailyNote
from dashdeck.core.workspace import derive
from dashdeck.core.workspace.models import (
    DashboardStats,
    Milestone,
    Priority,
    ProgressSummary,
    Project,
    Task,
    TaskStatus,
    WorkspaceSnapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class DashboardClientError(Exception):
    """Raised when the API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DashboardClient:
    """
    Explicitly refreshed, read-through copy of the dashboard data.

    Example:
        >>> with DashboardClient("http://127.0.0.1:8080") as client:
        ...     client.refresh()
        ...     [t.title for t in client.overdue()]
        ['File taxes']
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._data: DashboardData | None = None
        self._snapshot: WorkspaceSnapshot | None = None
        self._clock = clock or _now

    def __enter__(self) -> "DashboardClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> DashboardData:
        """Last payload fetched by refresh()."""
        if self._data is None:
            raise DashboardClientError("Dashboard data not loaded; call refresh() first")
        return self._data

    @property
    def snapshot(self) -> WorkspaceSnapshot:
        if self._snapshot is None:
            self._snapshot = self.data.to_snapshot()
        return self._snapshot

    def refresh(self) -> DashboardData:
        """Fetch GET /api/data and replace the local copy."""
        response = self._request("GET", "/api/data")
        self._data = DashboardData.model_validate(response.json())
        self._snapshot = None
        logger.debug("Refreshed dashboard data: %d tasks", len(self._data.tasks))
        return self._data

    def get_note(self, day: date) -> DailyNote | None:
        """Fetch the daily note for ``day``, or None if there is none."""
        response = self._request("GET", f"/api/notes/{day.isoformat()}", allow_not_found=True)
        if response.status_code == 404:
            return None
        return DailyNote.model_validate(response.json())

    def _request(
        self, method: str, path: str, allow_not_found: bool = False, **kwargs: Any
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise DashboardClientError(f"{method} {path} failed: {e}") from e

        if response.status_code == 404 and allow_not_found:
            return response
        if response.status_code >= 400:
            raise DashboardClientError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_task_status(self, task_id: str, status: TaskStatus) -> Task | None:
        return self._patch_task({"taskId": task_id, "status": TaskStatus(status).value})

    def update_task_priority(self, task_id: str, priority: Priority) -> Task | None:
        return self._patch_task({"taskId": task_id, "priority": Priority(priority).value})

    def assign_task(self, task_id: str, assignee: str | None) -> Task | None:
        return self._patch_task({"taskId": task_id, "assignedTo": assignee})

    def _patch_task(self, body: dict[str, Any]) -> Task | None:
        """
        Send PATCH /api/tasks and swap the result into the local copy.

        Returns:
            Updated Task, or None if the server has no such task
        """
        response = self._request("PATCH", "/api/tasks", allow_not_found=True, json=body)
        if response.status_code == 404:
            return None

        updated = Task.model_validate(response.json())
        if self._data is not None:
            self._data.tasks = [updated if t.id == updated.id else t for t in self._data.tasks]
            self._snapshot = None
            self._rederive()
        return updated

    def _rederive(self) -> None:
        # Keep the payload's derived fields in step with the edited tasks.
        now = self._clock()
        self.data.overdue = derive.overdue_tasks(self.snapshot, now)
        self.data.due_today = derive.tasks_due_today(self.snapshot, now)
        self.data.stats = derive.dashboard_stats(self.snapshot, now)

    # ------------------------------------------------------------------
    # Derived views over the local copy
    # ------------------------------------------------------------------

    def overdue(self, now: datetime | date | None = None) -> list[Task]:
        return derive.overdue_tasks(self.snapshot, now or self._clock())

    def due_today(self, now: datetime | date | None = None) -> list[Task]:
        return derive.tasks_due_today(self.snapshot, now or self._clock())

    def stats(self, now: datetime | date | None = None) -> DashboardStats:
        return derive.dashboard_stats(self.snapshot, now or self._clock())

    def high_priority(self) -> list[Task]:
        return derive.high_priority_tasks(self.snapshot)

    def unassigned(self) -> list[Task]:
        return derive.unassigned_tasks(self.snapshot)

    def tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return derive.tasks_by_status(self.snapshot, status)

    def tasks_by_priority(self, priority: Priority) -> list[Task]:
        return derive.tasks_by_priority(self.snapshot, priority)

    def tasks_for_project(self, project_id: str) -> list[Task]:
        return derive.tasks_for_project(self.snapshot, project_id)

    def tasks_for_milestone(self, project_id: str, milestone_id: str) -> list[Task]:
        return derive.tasks_for_milestone(self.snapshot, project_id, milestone_id)

    def project_progress(self, project_id: str) -> ProgressSummary:
        return derive.project_progress(self.snapshot, project_id)

    def milestone_progress(self, milestone: Milestone) -> ProgressSummary:
        return derive.milestone_progress(self.snapshot, milestone)

    def get_task(self, task_id: str) -> Task | None:
        return derive.find_task(self.snapshot, task_id)

    def get_project(self, project_id: str) -> Project | None:
        return derive.find_project(self.snapshot, project_id)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        details = body.get("details")
        return f"{body['error']} ({details})" if details else str(body["error"])
    return response.text
