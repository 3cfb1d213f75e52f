"""API route modules for the dashboard."""

from dashdeck.core.dashboard.api.routes import data, notes, tasks

__all__ = ["data", "notes", "tasks"]
