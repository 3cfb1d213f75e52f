"""Tests for workspace layout and initialization."""

from dashdeck.core.workspace.layout import WorkspaceLayout, ensure_workspace_layout, is_safe_id


class TestWorkspaceLayout:
    """Tests for WorkspaceLayout paths."""

    def test_paths(self, tmp_path):
        """Test that every area resolves under the root."""
        layout = WorkspaceLayout(tmp_path)
        assert layout.tasks_dir == tmp_path / "tasks"
        assert layout.daily_dir == tmp_path / "memory" / "daily"
        assert layout.facts_dir == tmp_path / "memory" / "facts"
        assert layout.projects_dir == tmp_path / "life" / "areas" / "projects"
        assert layout.graph_file == tmp_path / ".openclaw" / "graph.json"
        assert layout.task_file("t1") == tmp_path / "tasks" / "t1.json"
        assert layout.project_dir("web") == tmp_path / "life" / "areas" / "projects" / "web"


class TestEnsureWorkspaceLayout:
    """Tests for ensure_workspace_layout."""

    def test_creates_missing_directories(self, tmp_path):
        """Test that a fresh root gets every directory."""
        layout = WorkspaceLayout(tmp_path / "ws")
        created = ensure_workspace_layout(layout)

        assert set(created) == set(layout.directories())
        for directory in layout.directories():
            assert directory.is_dir()

    def test_idempotent(self, tmp_path):
        """Test that a second call creates nothing and changes nothing."""
        layout = WorkspaceLayout(tmp_path)
        ensure_workspace_layout(layout)
        marker = layout.task_file("keep")
        marker.write_text("{}")

        assert ensure_workspace_layout(layout) == []
        assert marker.read_text() == "{}"

    def test_partial_layout(self, tmp_path):
        """Test that only the missing directories are reported."""
        layout = WorkspaceLayout(tmp_path)
        layout.tasks_dir.mkdir()

        created = ensure_workspace_layout(layout)
        assert layout.tasks_dir not in created
        assert layout.facts_dir in created


class TestIsSafeId:
    """Tests for record id validation."""

    def test_plain_ids(self):
        """Test that ordinary ids are accepted."""
        assert is_safe_id("task-001")
        assert is_safe_id("a.b")

    def test_path_like_ids_rejected(self):
        """Test that ids that escape their directory are rejected."""
        for bad in ["", ".", "..", "../x", "a/b", "a\\b"]:
            assert not is_safe_id(bad)
