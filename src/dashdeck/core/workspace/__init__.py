"""
Workspace access for dashdeck.

Loads tasks, projects, facts and the relationship graph from a
file-backed workspace, derives dashboard views from them, and writes
single-field task edits back.
"""

from dashdeck.core.workspace.aggregator import WorkspaceAggregator
from dashdeck.core.workspace.layout import WorkspaceLayout, ensure_workspace_layout
from dashdeck.core.workspace.models import (
    DashboardStats,
    EdgeType,
    Fact,
    FactType,
    GraphData,
    GraphEdge,
    GraphNode,
    Milestone,
    Priority,
    ProgressSummary,
    Project,
    ProjectLinks,
    ProjectStatus,
    Task,
    TaskStatus,
    WorkspaceSnapshot,
)
from dashdeck.core.workspace.writer import TaskWriter

__all__ = [
    "DashboardStats",
    "EdgeType",
    "Fact",
    "FactType",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "Milestone",
    "Priority",
    "ProgressSummary",
    "Project",
    "ProjectLinks",
    "ProjectStatus",
    "Task",
    "TaskStatus",
    "TaskWriter",
    "WorkspaceAggregator",
    "WorkspaceLayout",
    "WorkspaceSnapshot",
    "ensure_workspace_layout",
]
