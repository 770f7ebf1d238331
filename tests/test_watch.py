"""Tests for gantt watch helper functions and TUI components."""

import asyncio

from rich.text import Text

from conftest import NOW, make_task

from ganttline.commands.watch import (
    ChartWidget,
    FilterBar,
    GanttApp,
    TooltipWidget,
    _format_row_markup,
    markup_paint,
)
from ganttline.lib.chart import GanttChart
from ganttline.lib.expansion import toggle_group
from ganttline.lib.models import ExpansionState, GanttState
from ganttline.lib.tooltip import resolve_tooltip


class TestFormatRowMarkup:
    """Tests for _format_row_markup."""

    def test_project_row(self, scenario_tasks):
        chart = GanttChart(scenario_tasks, now=NOW)
        row = chart.visible_rows(GanttState())[0]
        result = _format_row_markup(row, chart, 20)
        Text.from_markup(result)
        assert "X (2) 50%" in result

    def test_task_row_uses_status_color(self, scenario_tasks):
        chart = GanttChart(scenario_tasks, now=NOW)
        rows = chart.visible_rows(toggle_group(GanttState(), "X"))
        result = _format_row_markup(rows[1], chart, 20)
        Text.from_markup(result)
        assert "[#00C875]" in result

    def test_selected_row(self, scenario_tasks):
        chart = GanttChart(scenario_tasks, now=NOW)
        row = chart.visible_rows(GanttState())[0]
        result = _format_row_markup(row, chart, 20, selected=True)
        assert result.startswith("[reverse]")
        Text.from_markup(result)

    def test_brackets_in_names_are_literal(self):
        tasks = (make_task(1, "[wip] refactor", project="[core]"),)
        chart = GanttChart(tasks, now=NOW)
        rows = chart.visible_rows(toggle_group(GanttState(), "[core]"))
        for row in rows:
            text = Text.from_markup(_format_row_markup(row, chart, 20))
            assert "[" in text.plain

    def test_markup_paint(self):
        assert markup_paint("██", "#E44258") == "[#E44258]██[/#E44258]"


class TestWidgetRendering:
    """Tests that TUI widgets render without markup errors."""

    def test_chart_widget_renders_rows(self, mixed_tasks):
        chart = GanttChart(mixed_tasks, now=NOW)
        widget = ChartWidget(chart, 30)
        widget.rows = chart.visible_rows(toggle_group(GanttState(), "Frontend"))
        result = widget.render()
        Text.from_markup(result)
        assert "Login page" in result
        assert "Backend" in result

    def test_chart_widget_empty(self, mixed_tasks):
        chart = GanttChart(mixed_tasks, now=NOW)
        widget = ChartWidget(chart, 30)
        widget.rows = []
        result = widget.render()
        Text.from_markup(result)
        assert "No tasks match" in result

    def test_row_at(self, mixed_tasks):
        chart = GanttChart(mixed_tasks, now=NOW)
        widget = ChartWidget(chart, 30)
        widget.rows = chart.visible_rows(GanttState())
        assert widget.row_at(0) is None
        assert widget.row_at(3) == 0
        assert widget.row_at(5) == 2
        assert widget.row_at(6) is None

    def test_tooltip_widget_empty(self):
        widget = TooltipWidget()
        widget.tooltip = None
        result = widget.render()
        Text.from_markup(result)
        assert "Hover a task bar" in result

    def test_tooltip_widget_with_task(self):
        widget = TooltipWidget()
        task = make_task(1, "[urgent] Ship", "2024-01-05", "2024-01-20", status="blocked")
        widget.tooltip = resolve_tooltip(0, 0, task, now=NOW)
        result = widget.render()
        text = Text.from_markup(result)
        assert "[urgent] Ship" in text.plain
        assert "Start: Jan 5, 2024" in result
        assert "Status: blocked" in result

    def test_filter_bar_all_projects(self):
        bar = FilterBar()
        bar.project = ""
        bar.matches = 3
        bar.total = 5
        result = bar.render()
        Text.from_markup(result)
        assert "All Projects" in result
        assert "3/5 tasks" in result

    def test_filter_bar_selected_project(self):
        bar = FilterBar()
        bar.project = "Backend"
        result = bar.render()
        Text.from_markup(result)
        assert "Backend" in result


class TestGanttApp:
    """Structural checks on the app."""

    def test_has_bindings(self):
        keys = {b.key for b in GanttApp.BINDINGS}
        assert {"enter", "slash", "p", "e", "c", "x", "escape", "q"} <= keys

    def test_default_state(self, scenario_tasks):
        app = GanttApp(GanttChart(scenario_tasks, now=NOW))
        assert app.state == GanttState()
        assert app.export_path.name == "gantt_export.csv"

    def test_hover_row_uses_chart_now(self):
        """Tooltip end for a task without a due date matches its bar."""
        tasks = (make_task(1, "Open ended", "2024-04-02", None, project="X"),)
        chart = GanttChart(tasks, now=NOW)
        state = GanttState(expansion=ExpansionState(expanded=frozenset({"X"})))

        async def hover_task_row():
            app = GanttApp(chart, state)
            async with app.run_test():
                app.hover_row(1, 0, 0)
                return app.state.tooltip

        tooltip = asyncio.run(hover_task_row())
        assert tooltip.task.formatted_end == "May 15, 2024"
        assert (tooltip.x, tooltip.y) == (10, 10)
