"""
Pydantic models for dashboard API requests and responses.

Shared by the API routes and the client so both sides agree on the wire
format (camelCase keys).
"""

from pydantic import BaseModel, ConfigDict, Field

from dashdeck.core.workspace.models import (
    DashboardStats,
    Fact,
    GraphData,
    Priority,
    Project,
    Task,
    TaskStatus,
    WorkspaceSnapshot,
)


class DashboardData(BaseModel):
    """Response body of GET /api/data."""

    tasks: list[Task] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    facts: list[Fact] = Field(default_factory=list)
    graph: GraphData | None = Field(default=None)
    stats: DashboardStats = Field(default_factory=DashboardStats)
    overdue: list[Task] = Field(default_factory=list)
    due_today: list[Task] = Field(default_factory=list, alias="dueToday")

    model_config = ConfigDict(populate_by_name=True)

    def to_snapshot(self) -> WorkspaceSnapshot:
        """Records of this payload as a snapshot for local derivations."""
        return WorkspaceSnapshot(
            tasks=self.tasks, projects=self.projects, facts=self.facts, graph=self.graph
        )


class TaskUpdateRequest(BaseModel):
    """
    Request body of PATCH /api/tasks.

    ``assignedTo`` counts as supplied when the key is present, so
    ``{"taskId": "t1", "assignedTo": null}`` unassigns the task.
    """

    task_id: str = Field(..., alias="taskId", min_length=1)
    status: TaskStatus | None = None
    priority: Priority | None = None
    assigned_to: str | None = Field(default=None, alias="assignedTo")

    model_config = ConfigDict(populate_by_name=True)

    def has_update(self) -> bool:
        """Whether the body carries any edit at all."""
        return (
            self.status is not None
            or self.priority is not None
            or "assigned_to" in self.model_fields_set
        )
