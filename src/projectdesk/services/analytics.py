"""Filtering and dashboard statistics over a list of projects."""

from __future__ import annotations

from collections.abc import Iterable

from projectdesk.models import (
    Priority,
    Project,
    ProjectFilters,
    ProjectStats,
    ProjectStatus,
)

EXPENDITURE_CATEGORIES = frozenset({"maintenance", "safety", "infrastructure", "training"})
REVENUE_CATEGORIES = frozenset({"operations", "technology"})

ACTIVE_STATUSES = frozenset({ProjectStatus.IN_PROGRESS, ProjectStatus.PLANNING})
# The dashboard card counts "High" only; Critical projects are not included
HIGH_PRIORITIES = frozenset({Priority.HIGH})


def _matches_search(project: Project, term: str) -> bool:
    term = term.lower()
    haystacks = (project.name, project.description, project.manager or "")
    return any(term in text.lower() for text in haystacks)


def _matches_project_type(project: Project, project_type: str | None) -> bool:
    if project_type in (None, "all"):
        return True
    category = (project.category or "").lower()
    if project_type == "expenditure":
        return category in EXPENDITURE_CATEGORIES
    return category in REVENUE_CATEGORIES


def matches(project: Project, filters: ProjectFilters) -> bool:
    """Whether *project* passes every filter that is set."""
    if filters.search and not _matches_search(project, filters.search):
        return False
    if filters.status is not None and project.status != filters.status:
        return False
    if filters.priority is not None and project.priority != filters.priority:
        return False
    return _matches_project_type(project, filters.project_type)


def filter_projects(projects: Iterable[Project], filters: ProjectFilters) -> list[Project]:
    """Return the projects that match *filters*, preserving order."""
    return [project for project in projects if matches(project, filters)]


def calculate_stats(projects: Iterable[Project]) -> ProjectStats:
    """Summarise projects for a dashboard.

    Used budget is each project's budget weighted by its progress.
    """
    stats = ProjectStats()
    for project in projects:
        stats.total_projects += 1
        if project.status in ACTIVE_STATUSES:
            stats.active_projects += 1
        elif project.status == ProjectStatus.COMPLETED:
            stats.completed_projects += 1
        elif project.status == ProjectStatus.ON_HOLD:
            stats.projects_on_hold += 1
        if project.priority in HIGH_PRIORITIES:
            stats.high_priority_projects += 1

        stats.total_budget += project.budget
        stats.used_budget += project.budget * project.progress / 100

    stats.remaining_budget = stats.total_budget - stats.used_budget
    return stats
