"""
Pytest configuration and shared fixtures.

Provides fixtures for temporary workspaces, helpers that write task,
project, fact and daily-note files into them, and config isolation.
"""

import json
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from dashdeck.core.workspace.layout import WorkspaceLayout, ensure_workspace_layout

# Fixed "now" used by derivation tests: 2024-06-15 09:30 UTC
FIXED_NOW = datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc)


# ==============================================================================
# Workspace Fixtures
# ==============================================================================


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Provide an empty workspace root directory (no skeleton)."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def layout(workspace_root: Path) -> WorkspaceLayout:
    """Provide a workspace layout with all directories created."""
    workspace = WorkspaceLayout(workspace_root)
    ensure_workspace_layout(workspace)
    return workspace


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


# ==============================================================================
# Record Writers
# ==============================================================================


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def write_task(layout: WorkspaceLayout) -> Callable[..., Path]:
    """
    Write ``tasks/<id>.json``.

    Usage:
        write_task("task-001", status="done", dueDate="2024-06-01")
    """

    def _write(task_id: str, title: str | None = None, **fields: Any) -> Path:
        data = {"id": task_id, "title": title or f"Task {task_id}", **fields}
        return _write_json(layout.task_file(task_id), data)

    return _write


@pytest.fixture
def write_project(layout: WorkspaceLayout) -> Callable[..., Path]:
    """
    Write ``life/areas/projects/<id>/meta.json`` and optional ``summary.md``.

    Usage:
        write_project("website", name="Website", summary="# Notes")
    """

    def _write(project_id: str, summary: str | None = None, **fields: Any) -> Path:
        data = {"id": project_id, "name": fields.pop("name", project_id.title()), **fields}
        project_dir = layout.project_dir(project_id)
        _write_json(project_dir / "meta.json", data)
        if summary is not None:
            (project_dir / "summary.md").write_text(summary)
        return project_dir

    return _write


@pytest.fixture
def write_fact(layout: WorkspaceLayout) -> Callable[..., Path]:
    """Write ``memory/facts/<id>.json``."""

    def _write(fact_id: str, content: str = "A fact", **fields: Any) -> Path:
        data = {"id": fact_id, "content": content, **fields}
        return _write_json(layout.facts_dir / f"{fact_id}.json", data)

    return _write


@pytest.fixture
def write_note(layout: WorkspaceLayout) -> Callable[[str, str], Path]:
    """Write ``memory/daily/<YYYY-MM-DD>.md``."""

    def _write(day: str, text: str) -> Path:
        path = layout.daily_dir / f"{day}.md"
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def write_graph(layout: WorkspaceLayout) -> Callable[[dict[str, Any]], Path]:
    """Write ``.openclaw/graph.json``."""

    def _write(data: dict[str, Any]) -> Path:
        return _write_json(layout.graph_file, data)

    return _write


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """
    Provide a clean environment without DASHDECK_* env vars.

    Removes all DASHDECK_* and WORKSPACE_PATH variables so tests don't
    inherit configuration from the system.
    """
    for key in list(os.environ.keys()):
        if key.startswith("DASHDECK_") or key == "WORKSPACE_PATH":
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def isolated_config(clean_env, tmp_path, monkeypatch):
    """
    Provide a completely isolated config environment.

    Points XDG_CONFIG_HOME at a temporary directory and clears the config
    cache before and after the test.
    """
    from dashdeck.core.config import clear_cache

    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))

    clear_cache()
    yield config_home
    clear_cache()


# ==============================================================================
# API Fixtures
# ==============================================================================


@pytest.fixture
def api_app(layout: WorkspaceLayout, fixed_now: datetime):
    """
    Provide a dashboard app bound to the test workspace.

    "Now" is pinned to FIXED_NOW so due-date views are deterministic.
    """
    from dashdeck.core.dashboard.api.app import create_app
    from dashdeck.core.dashboard.api.deps import get_now

    app = create_app(cors_origins=["http://localhost:5173"])
    app.state.workspace_root = layout.root
    app.dependency_overrides[get_now] = lambda: fixed_now
    return app


@pytest.fixture
def api_client(api_app):
    """Provide a TestClient for the test app."""
    from fastapi.testclient import TestClient

    return TestClient(api_app)
