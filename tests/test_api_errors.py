"""
Tests for API error handling.

Tests validate:
- Consistent error response format with error codes
- HTTPException handling for string and dict details
- Validation error handling
- Uncaught exception handling
"""

import logging
from unittest.mock import patch

from fastapi.testclient import TestClient

from dashdeck.core.dashboard.api.app import ErrorCode


class TestErrorResponseFormat:
    """Tests for consistent error response format."""

    def test_404_format(self, api_client):
        """Test that 404s carry error, error_code and request_id."""
        response = api_client.patch("/api/tasks", json={"taskId": "nope", "status": "done"})

        data = response.json()
        assert data["error"] == "Task not found"
        assert data["error_code"] == ErrorCode.NOT_FOUND
        assert "request_id" in data
        assert "details" not in data

    def test_validation_error_format(self, api_client):
        """Test that validation errors name the offending field."""
        response = api_client.patch("/api/tasks", json={"taskId": "t1", "priority": "meh"})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "Request validation failed"
        assert "priority" in data["details"]

    def test_client_errors_logged_at_info(self, api_client, caplog):
        """Test that 4xx responses are logged at INFO, not ERROR."""
        with caplog.at_level(logging.INFO, logger="dashdeck.core.dashboard.api.app"):
            api_client.patch("/api/tasks", json={"taskId": "t1"})

        records = [r for r in caplog.records if r.name == "dashdeck.core.dashboard.api.app"]
        assert records
        assert all(r.levelno == logging.INFO for r in records)


class TestUncaughtExceptions:
    """Tests for the catch-all handler."""

    def test_unexpected_error_is_500(self, api_app, caplog):
        """Test that an exception outside the routes' own handling is a 500."""
        client = TestClient(api_app, raise_server_exceptions=False)

        with patch(
            "dashdeck.core.dashboard.api.routes.notes.DailyNotesReader.list_notes",
            side_effect=RuntimeError("boom"),
        ):
            with caplog.at_level(logging.ERROR):
                response = client.get("/api/notes")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == ErrorCode.INTERNAL_ERROR
        assert data["details"] == "boom"
        assert "Unhandled exception" in caplog.text

    def test_os_error_is_file_error(self, api_app):
        """Test that filesystem errors are tagged FILE_ERROR."""
        client = TestClient(api_app, raise_server_exceptions=False)

        with patch(
            "dashdeck.core.dashboard.api.routes.notes.DailyNotesReader.list_notes",
            side_effect=PermissionError("daily is not readable"),
        ):
            response = client.get("/api/notes")

        assert response.status_code == 500
        assert response.json()["error_code"] == ErrorCode.FILE_ERROR


class TestWriteFailures:
    """Tests for 500s raised by the task route itself."""

    def test_write_os_error_is_file_error(self, api_client, write_task):
        """Test that a failed task write caused by the filesystem is FILE_ERROR."""
        write_task("t1")

        with patch(
            "dashdeck.core.dashboard.api.routes.tasks.TaskWriter.set_task_status",
            side_effect=PermissionError("tasks is read-only"),
        ):
            response = api_client.patch("/api/tasks", json={"taskId": "t1", "status": "done"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to update task"
        assert data["error_code"] == ErrorCode.FILE_ERROR

    def test_error_text_does_not_pick_code(self, api_client, write_task):
        """Test that a non-filesystem failure mentioning permissions stays INTERNAL_ERROR."""
        write_task("t1")

        with patch(
            "dashdeck.core.dashboard.api.routes.tasks.TaskWriter.set_task_status",
            side_effect=RuntimeError("Permission denied by policy [Errno 13]"),
        ):
            response = api_client.patch("/api/tasks", json={"taskId": "t1", "status": "done"})

        assert response.status_code == 500
        assert response.json()["error_code"] == ErrorCode.INTERNAL_ERROR
