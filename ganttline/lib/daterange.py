"""
Visible date range of a task collection.

The range is computed from the full (unfiltered) collection so the axis
scale does not move while the user filters.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from ganttline.lib.dates import (
    first_day_of_quarter,
    last_day_of_quarter,
    month_bounds,
    parse_date,
)
from ganttline.lib.models import DateRange, Task


def task_interval(task: Task, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return (start, end) for a task using the tolerant parser."""
    return parse_date(task.created_at, now), parse_date(task.due_date, now)


def resolve_date_range(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
) -> DateRange:
    """
    Compute the quarter-aligned range from the earliest start to the
    latest end.

    Args:
        tasks: Full task collection
        now: Current moment, substituted for missing dates and used for
            the empty-collection default (defaults to datetime.now())

    Returns:
        DateRange snapped to the first day of the earliest quarter and
        the last day of the latest quarter, or the current month when
        there are no tasks
    """
    if now is None:
        now = datetime.now()

    min_day: Optional[date] = None
    max_day: Optional[date] = None

    for task in tasks:
        start, end = task_interval(task, now)
        if min_day is None or start.date() < min_day:
            min_day = start.date()
        if max_day is None or end.date() > max_day:
            max_day = end.date()

    if min_day is None or max_day is None:
        # Nothing to align: show the current month
        first, last = month_bounds(now.date())
        return DateRange(min=first, max=last)

    # Only inverted tasks can push the latest end before the earliest start
    if max_day < min_day:
        max_day = min_day

    return DateRange(
        min=first_day_of_quarter(min_day),
        max=last_day_of_quarter(max_day),
    )
