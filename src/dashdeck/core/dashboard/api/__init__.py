"""
FastAPI application for the dashdeck dashboard.

This module provides the REST API for the dashboard frontend, serving
data read straight from the workspace on every request.

API Endpoints:
- GET /api/data - Tasks, projects, facts, graph, stats and due views
- PATCH /api/tasks - Change status, priority or assignee of one task
- GET /api/notes - Parsed daily notes
- GET /api/notes/{day} - One daily note

Usage:
    # Run the server
    uvicorn dashdeck.core.dashboard.api.app:app --reload

    # Or from Python
    from dashdeck.core.dashboard.api.app import app
"""

from dashdeck.core.dashboard.api.app import app, create_app

__all__ = ["app", "create_app"]
