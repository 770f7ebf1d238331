"""
Chart facade: the output contract consumed by the presentation layer.

Derived values are cached against the task snapshot they came from:
- date range, quarters, project groups and bar positions are rebuilt
  only when a new snapshot is loaded
- filtered groups are rebuilt only when the filter state changes

UI state (filter, expansion, tooltip) is not held here. Callers pass a
GanttState in and get new states back from lib.filters, lib.expansion
and lib.tooltip.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from ganttline.lib import export, filters, projection, quarters, tooltip
from ganttline.lib.config import GanttConfig
from ganttline.lib.daterange import resolve_date_range
from ganttline.lib.grouping import group_tasks
from ganttline.lib.loader import tasks_from_records
from ganttline.lib.models import (
    DateRange,
    FilterState,
    GanttState,
    ProjectGroup,
    Quarter,
    Task,
    TaskPosition,
    Tooltip,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartRow:
    """One rendered row: a project header or a task bar."""
    kind: str  # "project" or "task"
    group: ProjectGroup
    task: Optional[Task] = None
    position: Optional[TaskPosition] = None
    expanded: bool = False


class GanttChart:
    """Memoized view over one task snapshot."""

    def __init__(
        self,
        tasks: Iterable[Union[dict, Task]] = (),
        config: Optional[GanttConfig] = None,
        now: Optional[datetime] = None,
    ) -> None:
        self.config = config or GanttConfig()
        self._fixed_now = now
        self._source: object = None
        self.load(tasks)

    def load(self, tasks: Iterable[Union[dict, Task]]) -> None:
        """Replace the task snapshot. Reloading the same object is a no-op."""
        if tasks is self._source:
            return
        self._source = tasks
        self._tasks = tasks_from_records(tasks)
        self._now = self._fixed_now or datetime.now()
        self._date_range: Optional[DateRange] = None
        self._quarters: Optional[tuple[Quarter, ...]] = None
        self._groups: Optional[tuple[ProjectGroup, ...]] = None
        self._filtered_key: Optional[FilterState] = None
        self._filtered: tuple[ProjectGroup, ...] = ()
        self._positions: dict[Task, TaskPosition] = {}
        logger.debug(f"Loaded snapshot with {len(self._tasks)} task(s)")

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def now(self) -> datetime:
        """Moment substituted for missing dates, fixed per snapshot."""
        return self._now

    @property
    def date_range(self) -> DateRange:
        if self._date_range is None:
            self._date_range = resolve_date_range(self._tasks, self._now)
        return self._date_range

    @property
    def quarters(self) -> tuple[Quarter, ...]:
        if self._quarters is None:
            self._quarters = tuple(quarters.partition_quarters(self.date_range))
        return self._quarters

    @property
    def quarter_spans(self) -> list[tuple[float, float]]:
        return quarters.quarter_spans(self.quarters, self.date_range)

    @property
    def project_groups(self) -> tuple[ProjectGroup, ...]:
        if self._groups is None:
            self._groups = tuple(group_tasks(self._tasks, self.config.no_project_label))
        return self._groups

    def filtered_project_groups(self, state: Union[GanttState, FilterState, None] = None) -> tuple[ProjectGroup, ...]:
        """Groups narrowed by the current filter state."""
        filter_state = _filter_of(state)
        if self._filtered_key != filter_state:
            self._filtered = tuple(filters.apply_filters(self.project_groups, filter_state))
            self._filtered_key = filter_state
        return self._filtered

    def task_position(self, task: Task) -> TaskPosition:
        """Bar position, computed once per task per snapshot."""
        position = self._positions.get(task)
        if position is None:
            position = projection.task_position(task, self.date_range, self._now)
            self._positions[task] = position
        return position

    def visible_rows(self, state: Optional[GanttState] = None) -> list[ChartRow]:
        """Rows in render order: every group header, task rows only when expanded."""
        state = state or GanttState()
        rows = []
        for group in self.filtered_project_groups(state):
            expanded = group.name in state.expansion.expanded
            rows.append(ChartRow(kind="project", group=group, expanded=expanded))
            if not expanded:
                continue
            for task in group.tasks:
                rows.append(ChartRow(
                    kind="task",
                    group=group,
                    task=task,
                    position=self.task_position(task),
                ))
        return rows

    def export_rows(self, state: Optional[GanttState] = None, include_header: bool = False) -> str:
        """CSV text of the filtered view."""
        return export.export_csv(
            self.filtered_project_groups(state),
            include_header=include_header,
            now=self._now,
        )

    def tooltip_for(self, event: tooltip.PointerEvent, task: Task) -> Optional[Tooltip]:
        """Tooltip for a pointer event over a task bar (None on hover end)."""
        if event.type != tooltip.HOVER_START:
            return tooltip.clear_tooltip()
        return tooltip.resolve_tooltip(
            event.x, event.y, task,
            offset=self.config.tooltip_offset,
            now=self._now,
        )

    def hover(self, state: GanttState, event: tooltip.PointerEvent, task: Optional[Task]) -> GanttState:
        """Apply a pointer event to `state` using this chart's offset and now."""
        return tooltip.hover(state, event, task, offset=self.config.tooltip_offset, now=self._now)

    def status_color(self, status: str) -> str:
        return self.config.color_for(status)


def _filter_of(state: Union[GanttState, FilterState, None]) -> FilterState:
    if state is None:
        return FilterState()
    if isinstance(state, GanttState):
        return state.filter
    return state
