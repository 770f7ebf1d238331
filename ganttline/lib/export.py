"""
CSV export of the filtered, grouped view.

Rows follow render order: group by group, task by task. Output carries
no header row unless asked for, and no trailing newline.
"""

import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from ganttline.lib.daterange import task_interval
from ganttline.lib.dates import format_iso_date
from ganttline.lib.models import ProjectGroup

EXPORT_HEADER = ("project", "task", "start", "end", "status")


def export_rows(
    groups: Iterable[ProjectGroup],
    now: Optional[datetime] = None,
) -> list[tuple[str, str, str, str, str]]:
    """Flatten groups into (project, task, start, end, status) rows."""
    rows = []
    for group in groups:
        for task in group.tasks:
            start, end = task_interval(task, now)
            rows.append((
                group.name,
                task.name,
                format_iso_date(start),
                format_iso_date(end),
                task.status,
            ))
    return rows


def export_csv(
    groups: Iterable[ProjectGroup],
    include_header: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """Serialize the view as comma-separated text.

    Fields containing commas, quotes or newlines are quoted.
    """
    rows = export_rows(groups, now)
    if include_header:
        rows.insert(0, EXPORT_HEADER)

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    text = buf.getvalue()
    return text[:-1] if text.endswith("\n") else text


def parse_csv(text: str) -> list[tuple[str, ...]]:
    """Read exported CSV text back into row tuples."""
    if not text:
        return []
    return [tuple(row) for row in csv.reader(io.StringIO(text))]
