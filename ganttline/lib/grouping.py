"""
Group tasks by parent project.
"""

from dataclasses import dataclass
from typing import Iterable

from ganttline.lib.models import (
    NO_PROJECT,
    STATUS_COMPLETED,
    ProjectGroup,
    Task,
    round_half_up,
)


def group_tasks(tasks: Iterable[Task], no_project_label: str = NO_PROJECT) -> list[ProjectGroup]:
    """
    Partition tasks into project groups.

    Groups appear in the order their project is first seen; tasks keep
    their input order within a group. Tasks without a project go to
    the `no_project_label` group.
    """
    buckets: dict[str, list[Task]] = {}
    for task in tasks:
        name = task.project_name or no_project_label
        buckets.setdefault(name, []).append(task)

    return [build_group(name, members) for name, members in buckets.items()]


def build_group(name: str, tasks: Iterable[Task]) -> ProjectGroup:
    """Build a ProjectGroup with fresh statistics."""
    members = tuple(tasks)
    completed = sum(1 for t in members if t.status == STATUS_COMPLETED)
    return ProjectGroup(name=name, tasks=members, total=len(members), completed=completed)


def project_names(groups: Iterable[ProjectGroup]) -> list[str]:
    """Project names in display order, for the project selector."""
    return [g.name for g in groups]


@dataclass
class GroupSummary:
    """Totals across all groups."""
    projects: int
    total: int
    completed: int

    @property
    def completion_percentage(self) -> int:
        if self.total == 0:
            return 0
        return round_half_up(self.completed / self.total * 100)


def summarize(groups: Iterable[ProjectGroup]) -> GroupSummary:
    """Aggregate task counts across groups."""
    projects = total = completed = 0
    for g in groups:
        projects += 1
        total += g.total
        completed += g.completed
    return GroupSummary(projects=projects, total=total, completed=completed)
