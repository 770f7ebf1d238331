#!/usr/bin/env python3
"""gantt CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from ganttline.lib.chart import GanttChart
from ganttline.lib.config import load_gantt_config, resolve_config_path
from ganttline.lib.expansion import expand_all
from ganttline.lib.loader import load_tasks
from ganttline.lib.models import ExpansionState, FilterState, GanttState
from ganttline.lib.validate import ValidationError
from ganttline.commands import export as cmd_export_module
from ganttline.commands import projects as cmd_projects_module
from ganttline.commands import show as cmd_show_module
from ganttline.commands import watch as cmd_watch_module


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_chart(args) -> GanttChart:
    """Load config and tasks named on the command line."""
    config = load_gantt_config(resolve_config_path(args.config))
    try:
        tasks = load_tasks(args.file)
    except ValidationError as e:
        print(f"ERROR: Could not load tasks from {args.file}")
        print(f"  {e}")
        sys.exit(2)
    return GanttChart(tasks, config=config)


def build_state(args, chart: GanttChart) -> GanttState:
    """Initial UI state from filter/expansion flags."""
    filter_state = FilterState(
        search_term=getattr(args, 'search', None) or "",
        selected_project=getattr(args, 'project', None) or "",
    )
    if getattr(args, 'expand_all', False):
        expansion = expand_all(chart.project_groups)
    else:
        expansion = ExpansionState(expanded=frozenset(getattr(args, 'expand', None) or ()))
    return GanttState(filter=filter_state, expansion=expansion)


def _run(args, handler) -> int:
    chart = get_chart(args)
    return handler(args, chart, build_state(args, chart))


def cmd_show(args):
    return _run(args, cmd_show_module.cmd_show)


def cmd_export(args):
    return _run(args, cmd_export_module.cmd_export)


def cmd_projects(args):
    return _run(args, cmd_projects_module.cmd_projects)


def cmd_watch(args):
    return _run(args, cmd_watch_module.cmd_watch)


def _add_filter_args(p):
    p.add_argument('--search', '-s', help='Only tasks whose name contains this text (case-insensitive)')
    p.add_argument('--project', help='Only this project (use "No Project" for unassigned tasks)')


def main(argv=None):
    parser = argparse.ArgumentParser(prog='gantt', description='Gantt chart for task exports')
    parser.add_argument('--config', '-c', type=Path, help='Path to gantt.yaml (default: $GANTT_CONFIG)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # gantt show
    p_show = subparsers.add_parser('show', help='Render the chart in the terminal')
    p_show.add_argument('file', type=Path, help='Task JSON file (list or paginated resource)')
    _add_filter_args(p_show)
    p_show.add_argument('--expand', '-e', action='append', metavar='PROJECT', help='Expand a project group (repeatable)')
    p_show.add_argument('--expand-all', '-a', action='store_true', help='Expand every project group')
    p_show.add_argument('--width', '-w', type=int, help='Timeline width in columns')
    p_show.add_argument('--no-color', action='store_true', help='Disable colors')
    p_show.set_defaults(func=cmd_show)

    # gantt export
    p_export = subparsers.add_parser('export', help='Export the filtered view as CSV')
    p_export.add_argument('file', type=Path, help='Task JSON file')
    _add_filter_args(p_export)
    p_export.add_argument('--header', action='store_true', help='Include a header row')
    p_export.add_argument('--output', '-o', type=Path, help='Write to file instead of stdout')
    p_export.set_defaults(func=cmd_export)

    # gantt projects
    p_projects = subparsers.add_parser('projects', help='List project groups with completion stats')
    p_projects.add_argument('file', type=Path, help='Task JSON file')
    _add_filter_args(p_projects)
    p_projects.set_defaults(func=cmd_projects)

    # gantt watch
    p_watch = subparsers.add_parser('watch', help='Interactive chart viewer')
    p_watch.add_argument('file', type=Path, help='Task JSON file')
    _add_filter_args(p_watch)
    p_watch.add_argument('--output', '-o', type=Path, help='Export path for the x key (default: gantt_export.csv)')
    p_watch.set_defaults(func=cmd_watch)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
