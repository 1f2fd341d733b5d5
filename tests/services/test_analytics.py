"""Tests for project filtering and dashboard statistics."""

from __future__ import annotations

import pytest

from projectdesk.models import Project, ProjectFilters, utcnow
from projectdesk.services.analytics import calculate_stats, filter_projects


def _project(project_id: str, **fields) -> Project:
    now = utcnow()
    return Project(id=project_id, owner="alice-id", created_at=now, updated_at=now, **fields)


@pytest.fixture()
def projects() -> list[Project]:
    return [
        _project(
            "p1",
            name="Pump house repair",
            status="In Progress",
            priority="High",
            budget=1000,
            progress=50,
            category="maintenance",
            manager="R. Kumar",
        ),
        _project(
            "p2",
            name="Ticketing app",
            description="Passenger app",
            status="Completed",
            priority="Low",
            budget=400,
            progress=100,
            category="technology",
        ),
        _project(
            "p3",
            name="Signal audit",
            status="On Hold",
            priority="Critical",
            budget=600,
            progress=0,
            category="safety",
        ),
        _project("p4", name="Staff rota", status="Planning", priority="Medium"),
    ]


class TestFilterProjects:
    def test_no_filters_keeps_all(self, projects):
        assert filter_projects(projects, ProjectFilters()) == projects

    def test_search_matches_name_description_and_manager(self, projects):
        assert [p.id for p in filter_projects(projects, ProjectFilters(search="PUMP"))] == ["p1"]
        assert [p.id for p in filter_projects(projects, ProjectFilters(search="passenger"))] == [
            "p2"
        ]
        assert [p.id for p in filter_projects(projects, ProjectFilters(search="kumar"))] == ["p1"]

    def test_status_and_priority(self, projects):
        filters = ProjectFilters(status="On Hold", priority="Critical")
        assert [p.id for p in filter_projects(projects, filters)] == ["p3"]

    def test_project_type_from_category(self, projects):
        expenditure = filter_projects(projects, ProjectFilters(project_type="expenditure"))
        revenue = filter_projects(projects, ProjectFilters(project_type="revenue"))
        everything = filter_projects(projects, ProjectFilters(project_type="all"))

        assert [p.id for p in expenditure] == ["p1", "p3"]
        assert [p.id for p in revenue] == ["p2"]
        assert len(everything) == 4


def test_calculate_stats(projects):
    stats = calculate_stats(projects)

    assert stats.total_projects == 4
    assert stats.active_projects == 2
    assert stats.completed_projects == 1
    assert stats.projects_on_hold == 1
    assert stats.high_priority_projects == 1
    assert stats.total_budget == 2000
    assert stats.used_budget == 900
    assert stats.remaining_budget == 1100


def test_calculate_stats_empty():
    stats = calculate_stats([])
    assert stats.total_projects == 0
    assert stats.total_budget == 0.0


def test_critical_is_not_counted_as_high_priority():
    stats = calculate_stats(
        [
            _project("p1", name="a", priority="Critical"),
            _project("p2", name="b", priority="High"),
            _project("p3", name="c", priority="High"),
        ]
    )
    assert stats.high_priority_projects == 2
