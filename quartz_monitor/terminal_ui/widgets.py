from datetime import datetime
from typing import List
from uuid import UUID

from textual.binding import Binding
from textual.widgets import DataTable, Input, Static

from quartz_monitor.models.dashboard import DashboardSummary
from quartz_monitor.models.resource import Resource, ResourceStatus
from quartz_monitor.utils.formatters import format_percent, time_ago

STATUS_COLORS = {
    ResourceStatus.UP: "green",
    ResourceStatus.DOWN: "red",
    ResourceStatus.DEGRADED: "yellow",
    ResourceStatus.UNKNOWN: "grey50",
}


def status_markup(status: ResourceStatus) -> str:
    return f"[{STATUS_COLORS[status]}]● {status.value.upper()}[/]"


class SummaryHeader(Static):
    """Header showing the dashboard counts and when they were last refreshed"""

    def __init__(self, **kwargs):
        super().__init__("Loading dashboard...", **kwargs)
        self.last_refresh: datetime | None = None

    def show_summary(self, summary: DashboardSummary) -> None:
        self.last_refresh = datetime.now()
        counts = summary.resource_status
        self.update(
            f"Clients: {summary.clients_count}   "
            f"Resources: {summary.resources_count} "
            f"([green]{counts.up} up[/] [red]{counts.down or 0} down[/] "
            f"[yellow]{counts.degraded or 0} degraded[/], "
            f"{format_percent(counts.healthy_percentage)} healthy)   "
            f"Active alerts: [bold red]{summary.active_alerts_count}[/]   "
            f"Open incidents: {summary.open_incidents_count}\n"
            f"Last updated: {self.last_refresh.strftime('%H:%M:%S')}"
        )

    def show_error(self, error: Exception) -> None:
        self.update(f"[red]Dashboard unavailable: {error}[/]")


class ResourcesTable(DataTable):
    """Resources list, one row per resource keyed by its id"""

    def __init__(self, **kwargs):
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)

    def on_mount(self) -> None:
        self.add_columns("Status", "Name", "Type", "Last checked")

    def show_resources(self, resources: List[Resource]) -> None:
        self.clear()
        for resource in resources:
            self.add_row(
                status_markup(resource.status),
                resource.name,
                resource.resource_type.display_name,
                time_ago(resource.last_checked_at) if resource.last_checked_at else "never",
                key=str(resource.id),
            )

    def selected_resource_id(self) -> UUID | None:
        if self.row_count == 0:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return UUID(row_key.value)


class SearchInput(Input):
    BINDINGS = [
        Binding(
            key="escape",
            action="exit_search_mode",
            description="exit search",
            show=False,
        )
    ]

    def __init__(self, **kwargs):
        super().__init__(placeholder="search resources", **kwargs)
        self.display = False

    def action_exit_search_mode(self):
        self.display = False
        self.app.query_one(ResourcesTable).focus()
