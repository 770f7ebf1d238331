"""Shared fixtures for ganttline tests."""

from datetime import datetime

import pytest

from ganttline.lib.models import ProjectRef, Task

# Fixed "current moment" so tolerant parsing is deterministic
NOW = datetime(2024, 5, 15, 12, 0, 0)


def make_task(
    id,
    name,
    created_at="2024-01-01",
    due_date="2024-01-10",
    status="pending",
    project=None,
    **extra,
) -> Task:
    """Build a Task with a project given by name."""
    return Task(
        id=id,
        name=name,
        status=status,
        created_at=created_at,
        due_date=due_date,
        project=ProjectRef(id=project, name=project) if project else None,
        extra=extra,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scenario_tasks():
    """Single project X with two tasks, one completed."""
    return (
        make_task(1, "A", "2024-01-05", "2024-01-20", status="completed", project="X"),
        make_task(2, "B", "2024-02-01", "2024-02-15", status="pending", project="X"),
    )


@pytest.fixture
def mixed_tasks():
    """Tasks across two projects plus one without a project, spanning 2023-2024."""
    return (
        make_task(1, "Design schema", "2023-11-20", "2024-01-15", status="completed", project="Backend"),
        make_task(2, "Login page", "2024-01-10", "2024-02-28", status="in_progress", project="Frontend"),
        make_task(3, "API endpoints", "2024-02-01", "2024-04-30", status="pending", project="Backend"),
        make_task(4, "Write docs", "2024-03-01", "2024-03-15", status="blocked"),
        make_task(5, "Dashboard", "2024-04-01", "2024-06-10", status="completed", project="Frontend"),
    )
