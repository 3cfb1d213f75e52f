"""Tests for PATCH /api/tasks."""

import json
from unittest.mock import patch

import pytest

from dashdeck.core.dashboard.api.app import ErrorCode


def _stored(layout, task_id: str) -> dict:
    return json.loads(layout.task_file(task_id).read_text())


@pytest.fixture
def task_file(layout, write_task):
    """A single todo/medium task with an assignee."""
    write_task("t1", title="Write report", assignedTo="alex", customField="kept")
    return layout.task_file("t1")


class TestUpdateTask:
    """Tests for single-field updates."""

    def test_update_status(self, api_client, layout, task_file):
        """Test that a status update is persisted and returned."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "status": "done"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "t1"
        assert body["status"] == "done"
        assert body["updatedAt"] is not None
        assert _stored(layout, "t1")["status"] == "done"

    def test_update_priority(self, api_client, layout, task_file):
        """Test that a priority update is persisted."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "priority": "urgent"})
        assert response.status_code == 200
        assert _stored(layout, "t1")["priority"] == "urgent"

    def test_assign(self, api_client, layout, task_file):
        """Test that assignedTo changes the assignee."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "assignedTo": "sam"})
        assert response.status_code == 200
        assert response.json()["assignedTo"] == "sam"

    def test_unassign_with_explicit_null(self, api_client, layout, task_file):
        """Test that an explicit null assignedTo clears the assignee."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "assignedTo": None})
        assert response.status_code == 200
        assert response.json()["assignedTo"] is None
        assert _stored(layout, "t1")["assignedTo"] is None

    def test_unknown_keys_survive(self, api_client, layout, task_file):
        """Test that the write keeps keys the API does not know."""
        api_client.patch("/api/tasks", json={"taskId": "t1", "status": "blocked"})
        assert _stored(layout, "t1")["customField"] == "kept"


class TestUpdatePrecedence:
    """Tests for which field wins when several are sent."""

    def test_status_wins(self, api_client, layout, task_file):
        """Test that status is applied and the other fields ignored."""
        api_client.patch(
            "/api/tasks",
            json={"taskId": "t1", "status": "in_progress", "priority": "low", "assignedTo": "x"},
        )
        stored = _stored(layout, "t1")
        assert stored["status"] == "in_progress"
        assert "priority" not in stored
        assert stored["assignedTo"] == "alex"

    def test_priority_beats_assignee(self, api_client, layout, task_file):
        """Test that priority is applied before assignee."""
        api_client.patch("/api/tasks", json={"taskId": "t1", "priority": "high", "assignedTo": "x"})
        stored = _stored(layout, "t1")
        assert stored["priority"] == "high"
        assert stored["assignedTo"] == "alex"


class TestUpdateErrors:
    """Tests for error responses."""

    def test_not_found(self, api_client, layout):
        """Test that an unknown task is a 404 and writes nothing."""
        response = api_client.patch("/api/tasks", json={"taskId": "ghost", "status": "done"})

        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"
        assert response.json()["error_code"] == ErrorCode.NOT_FOUND
        assert list(layout.tasks_dir.iterdir()) == []

    def test_no_update_field(self, api_client, task_file):
        """Test that a body with only taskId is a 400."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1"})
        assert response.status_code == 400
        assert response.json()["error_code"] == ErrorCode.INVALID_REQUEST

    def test_invalid_status(self, api_client, layout, task_file):
        """Test that an unknown status value is a 422 and nothing changes."""
        before = task_file.read_text()
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "status": "someday"})

        assert response.status_code == 422
        assert response.json()["error_code"] == ErrorCode.VALIDATION_ERROR
        assert task_file.read_text() == before

    def test_missing_task_id(self, api_client):
        """Test that taskId is required."""
        response = api_client.patch("/api/tasks", json={"status": "done"})
        assert response.status_code == 422

    def test_path_like_id_is_not_found(self, api_client, task_file):
        """Test that ids escaping tasks/ are treated as unknown."""
        response = api_client.patch("/api/tasks", json={"taskId": "../t1", "status": "done"})
        assert response.status_code == 404

    def test_write_failure_is_500(self, api_client, task_file):
        """Test that a failing write returns error and details."""
        with patch(
            "dashdeck.core.workspace.writer.write_json_atomic",
            side_effect=OSError("disk full"),
        ):
            response = api_client.patch("/api/tasks", json={"taskId": "t1", "status": "done"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to update task"
        assert body["details"] == "disk full"
