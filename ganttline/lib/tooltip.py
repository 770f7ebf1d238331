"""Hover tooltip state for task bars."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ganttline.lib.daterange import task_interval
from ganttline.lib.dates import format_display_date
from ganttline.lib.models import GanttState, Task, Tooltip, TooltipTask

# Pixels between the pointer and the tooltip corner
TOOLTIP_OFFSET = 10

HOVER_START = "mouseenter"
HOVER_END = "mouseleave"


@dataclass(frozen=True)
class PointerEvent:
    """Minimal pointer event: type plus client coordinates."""
    type: str
    x: float = 0
    y: float = 0


def resolve_tooltip(
    x: float,
    y: float,
    task: Task,
    offset: float = TOOLTIP_OFFSET,
    now: Optional[datetime] = None,
) -> Tooltip:
    """Build the tooltip for a hovered task, offset from the pointer."""
    start, end = task_interval(task, now)
    return Tooltip(
        x=x + offset,
        y=y + offset,
        task=TooltipTask(
            name=task.name,
            formatted_start=format_display_date(start),
            formatted_end=format_display_date(end),
            status=task.status,
        ),
    )


def clear_tooltip() -> None:
    return None


def hover(
    state: GanttState,
    event: PointerEvent,
    task: Optional[Task],
    offset: float = TOOLTIP_OFFSET,
    now: Optional[datetime] = None,
) -> GanttState:
    """Apply a hover-start or hover-end event to the UI state."""
    if event.type == HOVER_START:
        tooltip = resolve_tooltip(event.x, event.y, task, offset, now)
    else:
        tooltip = clear_tooltip()
    return replace(state, tooltip=tooltip)


def format_tooltip_lines(tooltip: Tooltip) -> list[str]:
    """Tooltip body as display lines."""
    return [
        tooltip.task.name,
        f"Start: {tooltip.task.formatted_start}",
        f"End: {tooltip.task.formatted_end}",
        f"Status: {tooltip.task.status}",
    ]
