"""
Project task intervals onto the normalized horizontal axis.
"""

import logging
from datetime import datetime
from typing import Optional

from ganttline.lib.daterange import task_interval
from ganttline.lib.models import DateRange, Task, TaskPosition

logger = logging.getLogger(__name__)


def project_interval(start: datetime, end: datetime, date_range: DateRange) -> TaskPosition:
    """
    Map an absolute interval onto [0, 100] percent of the range axis.

    The interval is clipped to the axis. An interval that ends before
    it starts gets zero width and is flagged as inverted.
    """
    axis_start = date_range.axis_start
    axis_end = date_range.axis_end
    total = date_range.total_seconds
    inverted = end < start

    if total <= 0:
        return TaskPosition(left_percent=0.0, width_percent=0.0, inverted=inverted)

    clipped_start = min(max(start, axis_start), axis_end)
    clipped_end = max(min(end, axis_end), axis_start)

    left = (clipped_start - axis_start).total_seconds() / total * 100
    width = (clipped_end - clipped_start).total_seconds() / total * 100

    left = min(max(left, 0.0), 100.0)
    width = min(max(width, 0.0), 100.0 - left)

    return TaskPosition(left_percent=left, width_percent=width, inverted=inverted)


def task_position(
    task: Task,
    date_range: DateRange,
    now: Optional[datetime] = None,
) -> TaskPosition:
    """Position of a task's bar within the date range."""
    start, end = task_interval(task, now)
    position = project_interval(start, end, date_range)
    if position.inverted:
        logger.warning(
            f"Task {task.id!r} ({task.name}) is due before it was created "
            f"({end:%Y-%m-%d} < {start:%Y-%m-%d}); drawing a zero-width bar"
        )
    return position
