"""
Search and project filtering over project groups.

Filtering runs on every keystroke, so it only narrows already-built
groups; it never touches the date range or quarter buckets.
"""

from dataclasses import replace
from typing import Iterable

from ganttline.lib.grouping import build_group
from ganttline.lib.models import FilterState, GanttState, ProjectGroup, Task


def task_matches(task: Task, search_term: str) -> bool:
    """Case-insensitive substring match on the task name."""
    if not search_term:
        return True
    return search_term.casefold() in (task.name or "").casefold()


def apply_filters(groups: Iterable[ProjectGroup], filter_state: FilterState) -> list[ProjectGroup]:
    """
    Narrow project groups by project selection and search term.

    The project predicate drops whole groups first, then tasks are
    matched by name, then groups left without tasks are dropped. Input
    groups are never modified; statistics of the returned groups cover
    only their surviving tasks.
    """
    selected = filter_state.selected_project
    result = []
    for group in groups:
        if selected and group.name != selected:
            continue
        tasks = [t for t in group.tasks if task_matches(t, filter_state.search_term)]
        if not tasks:
            continue
        result.append(build_group(group.name, tasks))
    return result


def with_search(state: GanttState, search_term: str) -> GanttState:
    """Return a new state with the search term replaced."""
    return replace(state, filter=replace(state.filter, search_term=search_term))


def with_project(state: GanttState, project: str) -> GanttState:
    """Return a new state with the project selection replaced ("" clears it)."""
    return replace(state, filter=replace(state.filter, selected_project=project))


def clear_filters(state: GanttState) -> GanttState:
    return replace(state, filter=FilterState())
