"""
Data types for the Gantt engine.

Input tasks are read-only snapshots handed over by the data layer.
Everything else here is derived and rebuilt on every recomputation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

# Task statuses
STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
STATUS_BLOCKED = "blocked"

VALID_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_BLOCKED)

NO_PROJECT = "No Project"

# Keys consumed by the engine; everything else on a record is passed through
_TASK_KEYS = ("id", "name", "status", "created_at", "due_date", "project")


@dataclass(frozen=True)
class ProjectRef:
    """Parent project reference carried by a task."""
    id: Any
    name: str


@dataclass(frozen=True, eq=False)
class Task:
    """A task as delivered by the data layer.

    created_at/due_date stay raw (string, date or datetime); parsing is
    the job of lib.dates so that bad values never fail construction.
    """
    id: Any
    name: str
    status: str
    created_at: Any = None
    due_date: Any = None
    project: Optional[ProjectRef] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def project_name(self) -> Optional[str]:
        return self.project.name if self.project else None

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Build a Task from an API resource record."""
        project = None
        raw_project = data.get("project")
        if isinstance(raw_project, dict) and raw_project.get("name"):
            project = ProjectRef(id=raw_project.get("id"), name=raw_project["name"])

        extra = {k: v for k, v in data.items() if k not in _TASK_KEYS}
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            status=data.get("status", STATUS_PENDING),
            created_at=data.get("created_at"),
            due_date=data.get("due_date"),
            project=project,
            extra=MappingProxyType(extra),
        )


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positives."""
    return int(value + 0.5)


@dataclass(frozen=True)
class ProjectGroup:
    """Tasks sharing a parent project, plus completion stats."""
    name: str
    tasks: tuple[Task, ...] = ()
    total: int = 0
    completed: int = 0

    @property
    def completion_percentage(self) -> int:
        if self.total == 0:
            return 0
        return round_half_up(self.completed / self.total * 100)


@dataclass(frozen=True)
class DateRange:
    """Quarter-aligned visible range.

    The horizontal axis runs from `min` 00:00 to `max` 00:00.
    """
    min: date
    max: date

    @property
    def axis_start(self) -> datetime:
        return datetime.combine(self.min, datetime.min.time())

    @property
    def axis_end(self) -> datetime:
        return datetime.combine(self.max, datetime.min.time())

    @property
    def total_seconds(self) -> float:
        return (self.axis_end - self.axis_start).total_seconds()


@dataclass(frozen=True)
class Quarter:
    """A calendar quarter bucket."""
    year: int
    quarter_number: int
    start: date
    end: date

    @property
    def label(self) -> str:
        return f"Q{self.quarter_number}"


@dataclass(frozen=True)
class TaskPosition:
    """Horizontal placement of a task bar, in percent of the axis."""
    left_percent: float
    width_percent: float
    inverted: bool = False  # due date before created date


@dataclass(frozen=True)
class FilterState:
    """Search and project filter. Empty strings mean no filter."""
    search_term: str = ""
    selected_project: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.search_term or self.selected_project)


@dataclass(frozen=True)
class ExpansionState:
    """Names of project groups whose task rows are shown."""
    expanded: frozenset = frozenset()


@dataclass(frozen=True)
class TooltipTask:
    """Display metadata for a hovered task."""
    name: str
    formatted_start: str
    formatted_end: str
    status: str


@dataclass(frozen=True)
class Tooltip:
    """Tooltip anchored next to the pointer."""
    x: float
    y: float
    task: TooltipTask


@dataclass(frozen=True)
class GanttState:
    """UI state owned by the presentation layer.

    Core operations take a state and return a new one.
    """
    filter: FilterState = field(default_factory=FilterState)
    expansion: ExpansionState = field(default_factory=ExpansionState)
    tooltip: Optional[Tooltip] = None
