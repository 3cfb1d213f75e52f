"""Tests for workspace record models."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from dashdeck.core.workspace.models import (
    DashboardStats,
    EdgeType,
    Fact,
    GraphData,
    Priority,
    Project,
    Task,
    TaskStatus,
    project_ref,
)


class TestTask:
    """Tests for the Task model."""

    def test_defaults(self):
        """Test that a minimal task gets todo/medium defaults."""
        task = Task(id="t1", title="Do it")
        assert task.status == TaskStatus.TODO
        assert task.priority == Priority.MEDIUM
        assert task.tags == []
        assert task.assigned_to is None

    def test_camel_case_aliases(self):
        """Test that stored camelCase keys populate the model."""
        task = Task.model_validate(
            {
                "id": "t1",
                "title": "Do it",
                "dueDate": "2024-06-01",
                "projectRef": "projects/website",
                "assignedTo": "alex",
            }
        )
        assert task.due_date == date(2024, 6, 1)
        assert task.project_id == "website"
        assert task.assigned_to == "alex"

    def test_dump_by_alias_round_trips_keys(self):
        """Test that serializing by alias gives back camelCase keys."""
        task = Task.model_validate({"id": "t1", "title": "x", "dueDate": "2024-06-01"})
        dumped = task.model_dump(mode="json", by_alias=True)
        assert dumped["dueDate"] == "2024-06-01"
        assert "due_date" not in dumped

    def test_due_date_timestamp_truncated_to_date(self):
        """Test that a full timestamp due date keeps only its date."""
        task = Task(id="t1", title="x", dueDate="2024-06-01T23:59:00Z")
        assert task.due_date == date(2024, 6, 1)

    def test_empty_due_date_is_none(self):
        """Test that an empty due date string means no due date."""
        assert Task(id="t1", title="x", dueDate="").due_date is None

    def test_naive_timestamp_treated_as_utc(self):
        """Test that naive timestamps become UTC-aware."""
        task = Task(id="t1", title="x", updatedAt="2024-06-01T10:00:00")
        assert task.updated_at == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    def test_short_fraction_naive_timestamp_treated_as_utc(self):
        """Test that a one-digit fraction without offset still becomes UTC-aware."""
        task = Task(id="t1", title="x", updatedAt="2024-01-01T10:00:00.5")
        assert task.updated_at == datetime(2024, 1, 1, 10, 0, 0, 500000, tzinfo=timezone.utc)

    def test_z_suffix_timestamp(self):
        """Test that a trailing Z parses as UTC."""
        task = Task(id="t1", title="x", createdAt="2024-06-01T10:00:00Z")
        assert task.created_at is not None
        assert task.created_at.tzinfo is not None

    def test_milestone_requires_project(self):
        """Test that a milestone reference without a project is rejected."""
        with pytest.raises(ValidationError, match="milestoneRef requires projectRef"):
            Task(id="t1", title="x", milestoneRef="m1")

    def test_invalid_status_rejected(self):
        """Test that unknown status values fail validation."""
        with pytest.raises(ValidationError):
            Task(id="t1", title="x", status="someday")

    def test_project_id_ignores_foreign_refs(self):
        """Test that a ref without the projects/ prefix has no project id."""
        assert Task(id="t1", title="x", projectRef="website").project_id is None


class TestPriority:
    """Tests for priority ranking."""

    def test_rank_order(self):
        """Test that urgent ranks before high, medium and low."""
        ranked = sorted(Priority, key=lambda p: p.rank)
        assert ranked == [Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW]


class TestProject:
    """Tests for the Project model."""

    def test_milestones_and_links(self):
        """Test that nested milestones and links validate."""
        project = Project.model_validate(
            {
                "id": "website",
                "name": "Website",
                "milestones": [{"id": "m1", "name": "Launch", "tasks": ["t1", "t2"]}],
                "links": {"people": ["alex"]},
            }
        )
        assert project.get_milestone("m1").tasks == ["t1", "t2"]
        assert project.get_milestone("missing") is None
        assert project.links.people == ["alex"]

    def test_duplicate_milestone_ids_rejected(self):
        """Test that milestone ids must be unique within a project."""
        with pytest.raises(ValidationError, match="Duplicate milestone id"):
            Project.model_validate(
                {
                    "id": "p",
                    "name": "P",
                    "milestones": [{"id": "m1", "name": "A"}, {"id": "m1", "name": "B"}],
                }
            )


class TestFact:
    """Tests for the Fact model."""

    def test_confidence_bounds(self):
        """Test that confidence must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            Fact(id="f1", content="x", confidence=1.5)

    def test_universal_default(self):
        """Test that facts are not universal by default."""
        assert Fact(id="f1", content="x").universal is False


class TestGraphData:
    """Tests for the graph snapshot model."""

    def test_stored_object_kept_as_is(self):
        """Test that the graph dumps back to exactly the stored object."""
        stored = {
            "version": 1,
            "layout": "force",
            "nodes": [{"id": "n1", "type": "task", "label": "N", "color": "red"}],
            "edges": [],
        }
        assert GraphData.model_validate(stored).model_dump(by_alias=True) == stored

    def test_unknown_edge_type_kept(self):
        """Test that an unlisted relation type is kept and has no known relation."""
        graph = GraphData.model_validate(
            {"nodes": [], "edges": [{"source": "a", "target": "b", "type": "likes"}]}
        )
        assert graph.edges[0].type == "likes"
        assert graph.edges[0].relation is None

    def test_known_edge_relation(self):
        """Test that listed relation types map to EdgeType."""
        graph = GraphData.model_validate(
            {"edges": [{"source": "a", "target": "b", "type": "depends_on"}]}
        )
        assert graph.edges[0].relation == EdgeType.DEPENDS_ON

    def test_views_skip_unusable_entries(self):
        """Test that entries without an id are left out of the typed view only."""
        stored = {"nodes": [{"id": "a"}, {"label": "no id"}, "junk"]}
        graph = GraphData.model_validate(stored)
        assert [n.id for n in graph.nodes] == ["a"]
        assert graph.nodes[0].label is None
        assert graph.model_dump() == stored


class TestDashboardStats:
    """Tests for the stats model."""

    def test_all_zero_by_default(self):
        """Test that every counter starts at zero."""
        dumped = DashboardStats().model_dump(by_alias=True)
        assert set(dumped.values()) == {0}
        assert "totalTasks" in dumped
        assert "universalFacts" in dumped


def test_project_ref():
    """Test building a project reference string."""
    assert project_ref("website") == "projects/website"
