"""
gantt export - Write the filtered view as CSV.
"""

from ganttline.lib.chart import GanttChart
from ganttline.lib.models import GanttState


def cmd_export(args, chart: GanttChart, state: GanttState) -> int:
    """Export the filtered view to stdout or --output."""
    text = chart.export_rows(state, include_header=args.header)

    if not args.output:
        if text:
            print(text)
        return 0

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n" if text else "")
    except OSError as e:
        print(f"ERROR: Could not write {args.output}: {e}")
        return 2

    groups = chart.filtered_project_groups(state)
    tasks = sum(g.total for g in groups)
    print(f"Exported {tasks} task(s) from {len(groups)} project(s) to {args.output}")
    return 0
