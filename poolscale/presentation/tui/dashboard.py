"""
Dashboard TUI

Architectural Intent:
- Textual-based dashboard for watching a cloud provider's node groups
- Each refresh tick goes through RefreshLoop, so a failing backend shows up
  as error log lines while the table keeps the last good generation
- Configurable refresh interval (+/- keys), immediate refresh (r)
"""

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, DataTable, Log
from textual.containers import Vertical
from typing import List
from datetime import datetime

from poolscale.application.dtos.node_group_dtos import NodeGroupSummary
from poolscale.application.use_cases.refresh_loop import RefreshLoop
from poolscale.domain.errors import CloudProviderError

COLUMNS = ("Node Group", "Min", "Max", "Target", "Nodes")


def summary_rows(summaries: List[NodeGroupSummary]) -> List[tuple[str, ...]]:
    return [
        (
            s.id,
            str(s.min_size),
            str(s.max_size),
            str(s.target_size),
            str(s.node_count),
        )
        for s in sorted(summaries, key=lambda s: s.id)
    ]


class Dashboard(App):
    """A Textual app showing the managed node groups."""

    CSS = """
    Screen {
        layout: vertical;
    }
    DataTable {
        height: 1fr;
        border: solid green;
    }
    Log {
        height: 1fr;
        border: solid yellow;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh_now", "Refresh Now"),
        ("plus", "increase_interval", "Slower"),
        ("minus", "decrease_interval", "Faster"),
    ]

    def __init__(self, refresh_loop: RefreshLoop, refresh_interval: float = 10.0):
        super().__init__()
        self.refresh_loop = refresh_loop
        self._refresh_interval = refresh_interval
        self._log_max_lines: int = 500
        self._log_lines: list[str] = []
        self._timer = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(DataTable(id="node_group_table"), Log(id="activity_log"))
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns(*COLUMNS)

        provider = self.refresh_loop.cloud_provider
        self.log_message(f"Watching {provider.name()} node groups.", severity="info")
        self._timer = self.set_interval(self._refresh_interval, self.update_node_groups)
        await self.update_node_groups()

    def log_message(self, message: str, severity: str = "info") -> None:
        log_widget = self.query_one(Log)
        timestamp = datetime.now().strftime("%H:%M:%S")
        line = f"[{timestamp}] [{severity.upper()}] {message}"
        self._log_lines.append(line)

        # Cap log growth
        if len(self._log_lines) > self._log_max_lines:
            self._log_lines = self._log_lines[-self._log_max_lines:]

        log_widget.write_line(line)

    async def action_refresh_now(self) -> None:
        await self.update_node_groups()

    def action_increase_interval(self) -> None:
        self._refresh_interval = min(120.0, self._refresh_interval + 5.0)
        self._restart_timer()
        self.log_message(f"Refresh interval: {self._refresh_interval}s")

    def action_decrease_interval(self) -> None:
        self._refresh_interval = max(5.0, self._refresh_interval - 5.0)
        self._restart_timer()
        self.log_message(f"Refresh interval: {self._refresh_interval}s")

    def _restart_timer(self) -> None:
        if self._timer:
            self._timer.stop()
        self._timer = self.set_interval(self._refresh_interval, self.update_node_groups)

    async def update_node_groups(self) -> None:
        report = await self.refresh_loop.tick()
        if not report.succeeded:
            self.log_message(f"Refresh failed: {report.error}", severity="error")

        provider = self.refresh_loop.cloud_provider
        try:
            summaries = [
                NodeGroupSummary.from_node_group(g) for g in provider.node_groups()
            ]
        except CloudProviderError as e:
            self.log_message(f"Could not read node groups: {e}", severity="warning")
            return

        table = self.query_one(DataTable)
        table.clear()
        for row in summary_rows(summaries):
            table.add_row(*row, key=row[0])

        self.log_message(
            f"Generation {report.generation}: {len(summaries)} node group(s)"
        )
