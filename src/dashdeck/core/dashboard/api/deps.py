"""
Request dependencies shared by the API routes.

The workspace location comes from ``app.state.workspace_root`` when the
CLI has set it, otherwise from the loaded configuration. Tests override
these dependencies through ``app.dependency_overrides``.
"""

from datetime import datetime, timezone

from fastapi import Request

from dashdeck.core.config import load_config
from dashdeck.core.workspace.layout import WorkspaceLayout


def get_layout(request: Request) -> WorkspaceLayout:
    """Workspace layout for the current request."""
    root = getattr(request.app.state, "workspace_root", None)
    if root is None:
        root = load_config().workspace
    return WorkspaceLayout(root)


def get_now() -> datetime:
    """Current time used for due-date derivations."""
    return datetime.now(timezone.utc)
