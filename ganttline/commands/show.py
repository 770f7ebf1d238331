"""
gantt show - Render the chart in the terminal.

Prints the quarter header, one row per project group (task count and
completion percentage) and a bar per task for expanded groups.
"""

from ganttline.lib.chart import GanttChart
from ganttline.lib.dates import format_display_date
from ganttline.lib.models import GanttState
from ganttline.lib.render import COLORS, ansi_paint, plain_paint, render_chart


def cmd_show(args, chart: GanttChart, state: GanttState) -> int:
    """Render the chart."""
    colorize = not args.no_color
    dim = COLORS["dim"] if colorize else ""
    reset = COLORS["reset"] if colorize else ""
    paint = ansi_paint if colorize else plain_paint

    date_range = chart.date_range
    print(f"{dim}Range:{reset}    {format_display_date(date_range.min)} - {format_display_date(date_range.max)}")
    print(f"{dim}Tasks:{reset}    {len(chart.tasks)}")
    if state.filter.is_active:
        shown = sum(g.total for g in chart.filtered_project_groups(state))
        print(f"{dim}Showing:{reset}  {shown} matching task(s)")
    print()

    for line in render_chart(chart, state, paint=paint, width=args.width):
        print(line)

    return 0
