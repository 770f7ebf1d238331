"""
Quarter buckets for the chart header and gridlines.
"""

from datetime import timedelta
from typing import Iterable

from ganttline.lib.dates import quarter_end, quarter_start
from ganttline.lib.models import DateRange, Quarter


def partition_quarters(date_range: DateRange) -> list[Quarter]:
    """
    List the quarters intersecting a date range, oldest first.

    A quarter is kept when quarter.end >= range.min and
    quarter.start <= range.max.
    """
    quarters = []
    for year in range(date_range.min.year, date_range.max.year + 1):
        for q in range(1, 5):
            start = quarter_start(year, q)
            end = quarter_end(year, q)
            if end >= date_range.min and start <= date_range.max:
                quarters.append(Quarter(year=year, quarter_number=q, start=start, end=end))
    return quarters


def quarter_spans(quarters: Iterable[Quarter], date_range: DateRange) -> list[tuple[float, float]]:
    """Return (offset, width) of each quarter as fractions of the range.

    Measured on the same axis as task bars (`min` to `max`): a quarter
    ends where the next one starts, the last one ends at `max`. Widths
    of the quarters intersecting the range add up to exactly 1.
    """
    total_days = (date_range.max - date_range.min).days
    spans = []
    for q in quarters:
        if total_days <= 0:
            spans.append((0.0, 0.0))
            continue
        start = max(q.start, date_range.min)
        end = min(q.end + timedelta(days=1), date_range.max)
        offset = (start - date_range.min).days / total_days
        width = max((end - start).days, 0) / total_days
        spans.append((offset, width))
    return spans


def group_by_year(quarters: Iterable[Quarter]) -> list[tuple[int, list[Quarter]]]:
    """Group consecutive quarters by year for the two-row header."""
    years: list[tuple[int, list[Quarter]]] = []
    for q in quarters:
        if years and years[-1][0] == q.year:
            years[-1][1].append(q)
        else:
            years.append((q.year, [q]))
    return years
