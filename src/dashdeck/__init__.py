"""
Dashdeck - Personal productivity dashboard

Reads tasks, projects, facts and daily notes from a file-backed workspace
and serves them to a dashboard frontend.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from dashdeck.core.config.models import DashdeckConfig
from dashdeck.core.workspace.models import Priority, Project, Task, TaskStatus

__all__ = ["DashdeckConfig", "Priority", "Project", "Task", "TaskStatus", "__version__"]
