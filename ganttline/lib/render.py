"""
Text rendering of a Gantt chart.

Lays the chart out in fixed-width columns: a label column on the left
and the timeline on the right, with a year row and a quarter row as
the header. Colors are applied through a `paint` callable so the same
layout serves ANSI terminals, Rich markup and plain text.
"""

from typing import Callable, Optional

from ganttline.lib.chart import ChartRow, GanttChart
from ganttline.lib.models import GanttState, TaskPosition
from ganttline.lib.quarters import group_by_year

LABEL_WIDTH = 30

BAR_FILL = "█"
BAR_EMPTY = " "
ZERO_WIDTH_MARK = "|"

EXPANDED_ARROW = "▼"
COLLAPSED_ARROW = "▶"

# ANSI codes (matches the palette used for log output)
COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "bold": "\033[1m",
}

Paint = Callable[[str, str], str]


def plain_paint(text: str, color: str) -> str:
    return text


def ansi_paint(text: str, color: str) -> str:
    """Color text with a 24-bit ANSI foreground from a '#RRGGBB' hex."""
    r, g, b = hex_to_rgb(color)
    return f"\033[38;2;{r};{g};{b}m{text}{COLORS['reset']}"


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def status_label(status: str) -> str:
    """Badge text for a status, e.g. 'IN PROGRESS'."""
    return status.replace("_", " ").upper()


def fit(text: str, width: int) -> str:
    """Pad or truncate text to exactly `width` characters."""
    if len(text) <= width:
        return text.ljust(width)
    if width <= 1:
        return text[:width]
    return text[:width - 1] + "…"


def bar_columns(position: TaskPosition, width: int) -> tuple[int, int]:
    """Column span [start, end) of a bar on a timeline `width` columns wide."""
    start = round(position.left_percent / 100 * width)
    end = round((position.left_percent + position.width_percent) / 100 * width)
    start = min(max(start, 0), width)
    end = min(max(end, start), width)
    if end == start and position.width_percent > 0 and start < width:
        end = start + 1
    return start, end


def render_bar(position: TaskPosition, width: int, color: str, paint: Paint) -> str:
    """Draw one bar on a blank timeline."""
    start, end = bar_columns(position, width)
    if end > start:
        body = paint(BAR_FILL * (end - start), color)
        return BAR_EMPTY * start + body + BAR_EMPTY * (width - end)
    # Zero-width bars still get a marker so the task is visible
    col = min(start, width - 1)
    return BAR_EMPTY * col + paint(ZERO_WIDTH_MARK, color) + BAR_EMPTY * (width - col - 1)


def header_lines(chart: GanttChart, width: int) -> list[str]:
    """Year row and quarter row of the timeline header."""
    bounds = []
    for offset, span in chart.quarter_spans:
        bounds.append((round(offset * width), round((offset + span) * width)))

    quarter_cells = []
    for q, (a, b) in zip(chart.quarters, bounds):
        quarter_cells.append(fit(q.label.center(b - a), b - a))

    year_cells = []
    index = 0
    for year, members in group_by_year(chart.quarters):
        a = bounds[index][0]
        b = bounds[index + len(members) - 1][1]
        year_cells.append(fit(str(year).center(b - a), b - a))
        index += len(members)

    return ["".join(year_cells).ljust(width), "".join(quarter_cells).ljust(width)]


def render_row(row: ChartRow, chart: GanttChart, width: int, paint: Paint) -> str:
    """Render a project header row or a task row."""
    if row.kind == "project":
        arrow = EXPANDED_ARROW if row.expanded else COLLAPSED_ARROW
        group = row.group
        label = f"{arrow} {group.name} ({group.total}) {group.completion_percentage}%"
        return fit(label, LABEL_WIDTH) + " " * width

    color = chart.status_color(row.task.status)
    label = fit(f"    {row.task.name}", LABEL_WIDTH)
    return label + render_bar(row.position, width, color, paint)


def render_legend(chart: GanttChart, paint: Paint) -> str:
    parts = []
    for status, color in chart.config.status_colors.items():
        parts.append(f"{paint(BAR_FILL, color)} {status_label(status)}")
    return "  ".join(parts)


def render_chart(
    chart: GanttChart,
    state: Optional[GanttState] = None,
    paint: Paint = plain_paint,
    width: Optional[int] = None,
) -> list[str]:
    """Render the whole chart as a list of lines."""
    state = state or GanttState()
    width = width or chart.config.bar_width

    lines = [" " * LABEL_WIDTH + h for h in header_lines(chart, width)]
    lines.append("-" * (LABEL_WIDTH + width))

    rows = chart.visible_rows(state)
    if not rows:
        lines.append("No tasks match the current filters.")
    for row in rows:
        lines.append(render_row(row, chart, width, paint))

    lines.append("")
    lines.append(render_legend(chart, paint))
    return lines
