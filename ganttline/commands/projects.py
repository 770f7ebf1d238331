"""
gantt projects - List project groups with completion stats.
"""

from ganttline.lib.chart import GanttChart
from ganttline.lib.grouping import summarize
from ganttline.lib.models import GanttState


def cmd_projects(args, chart: GanttChart, state: GanttState) -> int:
    """List project groups."""
    groups = chart.filtered_project_groups(state)
    if not groups:
        print("No projects found.")
        return 0

    name_width = max(len(g.name) for g in groups)
    for g in groups:
        print(f"  {g.name.ljust(name_width)}  {g.completed:>3}/{g.total:<3} {g.completion_percentage:>3}%")

    summary = summarize(groups)
    print()
    print(f"{summary.projects} project(s), {summary.completed}/{summary.total} task(s) completed "
          f"({summary.completion_percentage}%)")
    return 0
