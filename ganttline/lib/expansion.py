"""Expanded/collapsed tracking for project groups."""

from dataclasses import replace
from typing import Iterable

from ganttline.lib.models import ExpansionState, GanttState, ProjectGroup


def toggle(expansion: ExpansionState, name: str) -> ExpansionState:
    """Expand a collapsed group or collapse an expanded one."""
    if name in expansion.expanded:
        return ExpansionState(expanded=expansion.expanded - {name})
    return ExpansionState(expanded=expansion.expanded | {name})


def is_expanded(expansion: ExpansionState, name: str) -> bool:
    return name in expansion.expanded


def expand_all(groups: Iterable[ProjectGroup]) -> ExpansionState:
    return ExpansionState(expanded=frozenset(g.name for g in groups))


def collapse_all() -> ExpansionState:
    return ExpansionState()


def toggle_group(state: GanttState, name: str) -> GanttState:
    """Toggle a group on a full UI state."""
    return replace(state, expansion=toggle(state.expansion, name))


def expand_groups(state: GanttState, groups: Iterable[ProjectGroup]) -> GanttState:
    """Expand every group in `groups` on a full UI state."""
    return replace(state, expansion=expand_all(groups))


def collapse_groups(state: GanttState) -> GanttState:
    return replace(state, expansion=collapse_all())
