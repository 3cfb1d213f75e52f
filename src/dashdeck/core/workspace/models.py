"""
Workspace record models for dashdeck.

Defines the typed records loaded from the workspace (tasks, projects,
milestones, facts, graph) and the derived values computed from them
(progress summaries, dashboard stats, snapshots).

Records are stored on disk as camelCase JSON. Every field carries its
camelCase alias and the models accept both spellings, so a record read
from disk serializes back to the same keys.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    ValidationError,
    field_validator,
    model_validator,
)

PROJECT_REF_PREFIX = "projects/"


def project_ref(project_id: str) -> str:
    """Build the reference string tasks use to point at a project."""
    return f"{PROJECT_REF_PREFIX}{project_id}"


def _as_utc(v: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC so all timestamps compare."""
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


def _coerce_due_date(v: Any) -> Any:
    """Reduce a due date to its calendar date."""
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and len(v) > 10 and v[10] in ("T", " "):
        return v[:10]
    return v


class TaskStatus(str, Enum):
    """Task status values."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    """Priority levels shared by tasks, projects and milestones."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Sort rank (0 = most important)."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class ProjectStatus(str, Enum):
    """Project status values."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    PAUSED = "paused"
    COMPLETED = "completed"


class FactType(str, Enum):
    """Kinds of remembered facts."""

    PREFERENCE = "preference"
    WORKFLOW = "workflow"
    CONSTRAINT = "constraint"
    RELATIONSHIP = "relationship"
    FACT = "fact"


class EdgeType(str, Enum):
    """Relation types between graph nodes."""

    PART_OF = "part_of"
    BELONGS_TO = "belongs_to"
    ASSIGNED_TO = "assigned_to"
    DEPENDS_ON = "depends_on"
    REFERENCES = "references"


class Task(BaseModel):
    """
    A single task, stored as ``tasks/{id}.json``.

    Example:
        >>> task = Task(
        ...     id="task-001",
        ...     title="Write release notes",
        ...     priority=Priority.HIGH,
        ...     projectRef="projects/website",
        ...     dueDate="2024-05-01",
        ... )
        >>> task.project_id
        'website'
    """

    id: str = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current status")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority level")
    description: str | None = Field(default=None, description="Free-text details")
    due_date: date | None = Field(default=None, alias="dueDate", description="Due date")
    project_ref: str | None = Field(
        default=None, alias="projectRef", description="Owning project ('projects/{id}')"
    )
    milestone_ref: str | None = Field(
        default=None, alias="milestoneRef", description="Milestone id within the project"
    )
    assigned_to: str | None = Field(
        default=None, alias="assignedTo", description="Assigned person or agent"
    )
    tags: list[str] = Field(default_factory=list, description="Tags")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> Any:
        return _coerce_due_date(v)

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @model_validator(mode="after")
    def check_milestone_scope(self) -> "Task":
        """A milestone is scoped to a project, so it needs one."""
        if self.milestone_ref and not self.project_ref:
            raise ValueError("milestoneRef requires projectRef")
        return self

    @property
    def project_id(self) -> str | None:
        """Project id extracted from the project reference."""
        if self.project_ref and self.project_ref.startswith(PROJECT_REF_PREFIX):
            return self.project_ref[len(PROJECT_REF_PREFIX) :]
        return None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


class Milestone(BaseModel):
    """An ordered group of tasks inside a project."""

    id: str = Field(..., description="Milestone id, unique within its project")
    name: str = Field(..., description="Display name")
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: Priority = Field(default=Priority.MEDIUM)
    due_date: date | None = Field(default=None, alias="dueDate")
    tasks: list[str] = Field(default_factory=list, description="Task ids in order")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> Any:
        return _coerce_due_date(v)


class ProjectLinks(BaseModel):
    """References from a project to related records."""

    tasks: list[str] = Field(default_factory=list)
    people: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    facts: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)


class Project(BaseModel):
    """
    A project, stored as a directory with ``meta.json`` and an optional
    ``summary.md``.

    ``path`` and ``summary`` are not part of ``meta.json``; the aggregator
    fills them in from the directory.
    """

    id: str = Field(..., description="Project id (the directory name)")
    name: str = Field(..., description="Display name")
    description: str | None = Field(default=None)
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE)
    priority: Priority = Field(default=Priority.MEDIUM)
    tags: list[str] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    links: ProjectLinks = Field(default_factory=ProjectLinks)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    path: str | None = Field(default=None, description="Project directory on disk")
    summary: str | None = Field(default=None, description="Contents of summary.md")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @model_validator(mode="after")
    def check_unique_milestones(self) -> "Project":
        seen: set[str] = set()
        for milestone in self.milestones:
            if milestone.id in seen:
                raise ValueError(f"Duplicate milestone id '{milestone.id}'")
            seen.add(milestone.id)
        return self

    def get_milestone(self, milestone_id: str) -> Milestone | None:
        for milestone in self.milestones:
            if milestone.id == milestone_id:
                return milestone
        return None


class Fact(BaseModel):
    """A remembered fact, stored as ``memory/facts/{id}.json``."""

    id: str = Field(..., description="Fact id")
    type: FactType = Field(default=FactType.FACT)
    content: str = Field(..., description="Free-text content")
    tags: list[str] = Field(default_factory=list)
    entity_ref: str | None = Field(default=None, alias="entityRef")
    project_ref: str | None = Field(default=None, alias="projectRef")
    universal: bool = Field(default=False, description="Applies across all projects")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at")
    @classmethod
    def validate_timestamps(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class GraphNode(BaseModel):
    """Read view of one graph node."""

    id: str
    type: str | None = None
    label: str | None = None
    x: float | None = None
    y: float | None = None

    model_config = ConfigDict(extra="allow")


class GraphEdge(BaseModel):
    """Read view of one graph edge."""

    source: str
    target: str
    type: str | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def relation(self) -> EdgeType | None:
        """The edge type as a known EdgeType, or None for any other value."""
        try:
            return EdgeType(self.type)
        except ValueError:
            return None


class GraphData(RootModel[dict[str, Any]]):
    """
    Relationship graph snapshot.

    Holds the stored JSON object as is and serializes back to exactly the
    same keys and values. ``nodes`` and ``edges`` give typed views of the
    entries; entries that do not fit the view are left out of it but stay
    in the payload.
    """

    @property
    def version(self) -> Any:
        return self.root.get("version")

    @property
    def nodes(self) -> list[GraphNode]:
        return _graph_entries(self.root.get("nodes"), GraphNode)

    @property
    def edges(self) -> list[GraphEdge]:
        return _graph_entries(self.root.get("edges"), GraphEdge)


GraphEntryT = TypeVar("GraphEntryT", GraphNode, GraphEdge)


def _graph_entries(raw: Any, model: type[GraphEntryT]) -> list[GraphEntryT]:
    if not isinstance(raw, list):
        return []
    entries: list[GraphEntryT] = []
    for item in raw:
        try:
            entries.append(model.model_validate(item))
        except ValidationError:
            continue
    return entries


class WorkspaceSnapshot(BaseModel):
    """Every record loaded from the workspace at one point in time."""

    tasks: list[Task] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    facts: list[Fact] = Field(default_factory=list)
    graph: GraphData | None = Field(default=None)
    loaded_at: datetime | None = Field(default=None, alias="loadedAt")

    model_config = ConfigDict(populate_by_name=True)


class ProgressSummary(BaseModel):
    """Completion counts for a project or milestone."""

    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0, alias="inProgress")
    todo: int = Field(default=0, ge=0)
    percentage: int = Field(default=0, ge=0, le=100)

    model_config = ConfigDict(populate_by_name=True)


class DashboardStats(BaseModel):
    """
    Aggregate counts for the dashboard header.

    Example response:
        {
          "totalTasks": 12,
          "completedTasks": 5,
          "overdueTasks": 1,
          "activeProjects": 2,
          ...
        }
    """

    total_tasks: int = Field(default=0, alias="totalTasks")
    completed_tasks: int = Field(default=0, alias="completedTasks")
    in_progress_tasks: int = Field(default=0, alias="inProgressTasks")
    todo_tasks: int = Field(default=0, alias="todoTasks")
    blocked_tasks: int = Field(default=0, alias="blockedTasks")
    cancelled_tasks: int = Field(default=0, alias="cancelledTasks")
    high_priority_tasks: int = Field(default=0, alias="highPriorityTasks")
    urgent_tasks: int = Field(default=0, alias="urgentTasks")
    overdue_tasks: int = Field(default=0, alias="overdueTasks")
    due_today_tasks: int = Field(default=0, alias="dueTodayTasks")
    unassigned_tasks: int = Field(default=0, alias="unassignedTasks")

    total_projects: int = Field(default=0, alias="totalProjects")
    active_projects: int = Field(default=0, alias="activeProjects")
    paused_projects: int = Field(default=0, alias="pausedProjects")
    archived_projects: int = Field(default=0, alias="archivedProjects")
    completed_projects: int = Field(default=0, alias="completedProjects")

    total_facts: int = Field(default=0, alias="totalFacts")
    universal_facts: int = Field(default=0, alias="universalFacts")

    model_config = ConfigDict(populate_by_name=True)
