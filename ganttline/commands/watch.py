"""
gantt watch - Interactive chart viewer.

Interactive TUI over a task snapshot: the search box re-filters on
every keystroke, project groups expand and collapse, and hovering a
task bar (or moving the cursor onto it) shows its tooltip.
"""

from pathlib import Path
from typing import Optional

from rich.markup import escape
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input, Static

from ganttline.lib import expansion, filters
from ganttline.lib.chart import ChartRow, GanttChart
from ganttline.lib.dates import format_display_date
from ganttline.lib.grouping import project_names
from ganttline.lib.models import GanttState, Tooltip
from ganttline.lib.render import (
    COLLAPSED_ARROW,
    EXPANDED_ARROW,
    LABEL_WIDTH,
    fit,
    header_lines,
    render_bar,
)
from ganttline.lib.tooltip import HOVER_END, HOVER_START, PointerEvent, format_tooltip_lines

DEFAULT_EXPORT_PATH = Path("gantt_export.csv")

# Lines above the first row inside ChartWidget (year, quarter, rule)
HEADER_LINES = 3


def markup_paint(text: str, color: str) -> str:
    """Color text with Rich markup."""
    return f"[{color}]{text}[/{color}]"


def _format_row_markup(row: ChartRow, chart: GanttChart, width: int, selected: bool = False) -> str:
    """Format a chart row with Rich markup. Labels are escaped."""
    if row.kind == "project":
        arrow = EXPANDED_ARROW if row.expanded else COLLAPSED_ARROW
        group = row.group
        label = f"{arrow} {group.name} ({group.total}) {group.completion_percentage}%"
        line = f"[bold]{escape(fit(label, LABEL_WIDTH))}[/bold]" + " " * width
    else:
        color = chart.status_color(row.task.status)
        label = escape(fit(f"    {row.task.name}", LABEL_WIDTH))
        line = label + render_bar(row.position, width, color, markup_paint)

    if selected:
        return f"[reverse]{line}[/reverse]"
    return line


class ChartWidget(Static):
    """Timeline header plus project and task rows."""

    can_focus = True

    rows: reactive[list] = reactive(list, always_update=True)
    cursor: reactive[int] = reactive(0)

    def __init__(self, chart: GanttChart, width: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.chart = chart
        self.bar_width = width

    def render(self) -> str:
        lines = [" " * LABEL_WIDTH + escape(h) for h in header_lines(self.chart, self.bar_width)]
        lines.append("-" * (LABEL_WIDTH + self.bar_width))

        if not self.rows:
            lines.append("[dim]No tasks match the current filters[/dim]")
            return "\n".join(lines)

        for index, row in enumerate(self.rows):
            lines.append(_format_row_markup(row, self.chart, self.bar_width, index == self.cursor))
        return "\n".join(lines)

    def row_at(self, y: int) -> Optional[int]:
        """Row index under widget-relative line `y`, if any."""
        index = y - HEADER_LINES
        if 0 <= index < len(self.rows):
            return index
        return None

    def on_mouse_move(self, event: events.MouseMove) -> None:
        index = self.row_at(event.y)
        app = self.app
        if isinstance(app, GanttApp):
            app.hover_row(index, event.screen_x, event.screen_y)

    def on_leave(self, event: events.Leave) -> None:
        app = self.app
        if isinstance(app, GanttApp):
            app.hover_row(None)


class TooltipWidget(Static):
    """Details of the hovered task."""

    tooltip: reactive[Optional[Tooltip]] = reactive(None)

    def render(self) -> str:
        if not self.tooltip:
            return "[dim]Hover a task bar for details[/dim]"
        name, *details = format_tooltip_lines(self.tooltip)
        lines = [f"[bold]{escape(name)}[/bold]"]
        lines.extend(escape(d) for d in details)
        return "\n".join(lines)


class FilterBar(Static):
    """Shows the active project filter and match count."""

    project: reactive[str] = reactive("")
    matches: reactive[int] = reactive(0)
    total: reactive[int] = reactive(0)

    def render(self) -> str:
        project = escape(self.project) if self.project else "All Projects"
        return f"Project: [cyan]{project}[/cyan]  [dim]{self.matches}/{self.total} tasks[/dim]"


class GanttApp(App):
    """Interactive Gantt chart."""

    CSS = """
    #main-container {
        layout: vertical;
        padding: 0 1;
    }

    #search {
        margin-bottom: 1;
    }

    #chart-scroll {
        height: 1fr;
        border: solid blue;
    }

    #tooltip-box {
        border: solid green;
        padding: 0 1;
        height: auto;
    }

    ChartWidget {
        height: auto;
    }

    TooltipWidget {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("enter", "toggle_group", "Expand/collapse"),
        Binding("slash", "focus_search", "Search"),
        Binding("p", "next_project", "Project"),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse all"),
        Binding("x", "export", "Export CSV"),
        Binding("escape", "clear_filters", "Clear filters"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, chart: GanttChart, state: Optional[GanttState] = None, export_path: Optional[Path] = None) -> None:
        super().__init__()
        self.chart = chart
        self.state = state or GanttState()
        self.export_path = export_path or DEFAULT_EXPORT_PATH

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Input(value=self.state.filter.search_term, placeholder="Search tasks...", id="search"),
            FilterBar(id="filter-bar"),
            VerticalScroll(ChartWidget(self.chart, self.chart.config.bar_width, id="chart"), id="chart-scroll"),
            Container(TooltipWidget(id="tooltip"), id="tooltip-box"),
            id="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        date_range = self.chart.date_range
        self.title = "gantt watch"
        self.sub_title = f"{format_display_date(date_range.min)} - {format_display_date(date_range.max)}"
        self.refresh_view()
        self.query_one("#chart", ChartWidget).focus()

    def refresh_view(self) -> None:
        """Push the current state into the widgets."""
        chart_widget = self.query_one("#chart", ChartWidget)
        rows = self.chart.visible_rows(self.state)
        chart_widget.rows = rows
        if chart_widget.cursor >= len(rows):
            chart_widget.cursor = max(len(rows) - 1, 0)

        filter_bar = self.query_one("#filter-bar", FilterBar)
        filter_bar.project = self.state.filter.selected_project
        filter_bar.matches = sum(g.total for g in self.chart.filtered_project_groups(self.state))
        filter_bar.total = len(self.chart.tasks)

        self.query_one("#tooltip", TooltipWidget).tooltip = self.state.tooltip

    def _current_row(self) -> Optional[ChartRow]:
        chart_widget = self.query_one("#chart", ChartWidget)
        if 0 <= chart_widget.cursor < len(chart_widget.rows):
            return chart_widget.rows[chart_widget.cursor]
        return None

    def hover_row(self, index: Optional[int], x: float = 0, y: float = 0) -> None:
        """Show or clear the tooltip for the row at `index`."""
        chart_widget = self.query_one("#chart", ChartWidget)
        row = chart_widget.rows[index] if index is not None else None
        if row is not None and row.kind == "task":
            self.state = self.chart.hover(self.state, PointerEvent(HOVER_START, x, y), row.task)
        elif self.state.tooltip is not None:
            self.state = self.chart.hover(self.state, PointerEvent(HOVER_END), None)
        self.query_one("#tooltip", TooltipWidget).tooltip = self.state.tooltip

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.state = filters.with_search(self.state, event.value)
        self.refresh_view()

    @on(Input.Submitted, "#search")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#chart", ChartWidget).focus()

    def _move_cursor(self, delta: int) -> None:
        chart_widget = self.query_one("#chart", ChartWidget)
        if not chart_widget.rows:
            return
        chart_widget.cursor = min(max(chart_widget.cursor + delta, 0), len(chart_widget.rows) - 1)
        self.hover_row(chart_widget.cursor, 0, chart_widget.cursor + HEADER_LINES)

    def action_cursor_up(self) -> None:
        self._move_cursor(-1)

    def action_cursor_down(self) -> None:
        self._move_cursor(1)

    def action_toggle_group(self) -> None:
        row = self._current_row()
        if row is None:
            return
        self.state = expansion.toggle_group(self.state, row.group.name)
        self.refresh_view()

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_next_project(self) -> None:
        """Cycle the project filter through All Projects and each project."""
        options = [""] + project_names(self.chart.project_groups)
        current = self.state.filter.selected_project
        index = options.index(current) if current in options else 0
        self.state = filters.with_project(self.state, options[(index + 1) % len(options)])
        self.refresh_view()

    def action_expand_all(self) -> None:
        groups = self.chart.filtered_project_groups(self.state)
        self.state = expansion.expand_groups(self.state, groups)
        self.refresh_view()

    def action_collapse_all(self) -> None:
        self.state = expansion.collapse_groups(self.state)
        self.refresh_view()

    def action_clear_filters(self) -> None:
        search = self.query_one("#search", Input)
        self.state = filters.clear_filters(self.state)
        search.value = ""
        self.query_one("#chart", ChartWidget).focus()
        self.refresh_view()

    def action_export(self) -> None:
        text = self.chart.export_rows(self.state)
        try:
            self.export_path.write_text(text + "\n" if text else "")
        except OSError as e:
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Exported to {self.export_path}", severity="information")


def cmd_watch(args, chart: GanttChart, state: GanttState) -> int:
    """Open the interactive viewer."""
    app = GanttApp(chart, state, export_path=args.output)
    app.run()
    return 0
