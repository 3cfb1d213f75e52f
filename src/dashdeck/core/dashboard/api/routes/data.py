"""
Data API route for the dashboard.

Provides the single read endpoint the frontend loads on startup and on
every refresh:
- GET /api/data - All tasks, projects, facts and the graph, plus stats
  and the overdue / due-today views
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from dashdeck.core.dashboard.api.deps import get_layout, get_now
from dashdeck.core.dashboard.models import DashboardData
from dashdeck.core.workspace import derive
from dashdeck.core.workspace.aggregator import WorkspaceAggregator
from dashdeck.core.workspace.layout import WorkspaceLayout, ensure_workspace_layout

router = APIRouter()


def build_dashboard_data(layout: WorkspaceLayout, now: datetime) -> DashboardData:
    """Load the workspace and compute every view the dashboard shows."""
    ensure_workspace_layout(layout)
    snapshot = WorkspaceAggregator(layout).load_snapshot()

    return DashboardData(
        tasks=snapshot.tasks,
        projects=snapshot.projects,
        facts=snapshot.facts,
        graph=snapshot.graph,
        stats=derive.dashboard_stats(snapshot, now),
        overdue=derive.overdue_tasks(snapshot, now),
        due_today=derive.tasks_due_today(snapshot, now),
    )


@router.get("/data", response_model=DashboardData)
def get_data(
    layout: WorkspaceLayout = Depends(get_layout),
    now: datetime = Depends(get_now),
) -> DashboardData:
    """
    Get everything the dashboard renders.

    The workspace is read in full on every call; there is no server-side
    cache. Missing directories are created first, so a fresh workspace
    returns empty lists, ``graph: null`` and zeroed stats.

    Raises:
        HTTPException: 500 if the workspace cannot be read

    Example response:
        {
          "tasks": [...],
          "projects": [...],
          "facts": [...],
          "graph": null,
          "stats": {"totalTasks": 3, "overdueTasks": 1, ...},
          "overdue": [...],
          "dueToday": [...]
        }
    """
    try:
        return build_dashboard_data(layout, now)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to load data", "details": str(e)},
        ) from e
