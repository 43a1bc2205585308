from typing import List

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from quartz_monitor.terminal_ui.widgets import status_markup
from quartz_monitor.utils.formatters import format_cost, format_percent, time_ago
from quartz_monitor.viewmodels import (
    AlertDetailViewModel,
    ClientDetailViewModel,
    IncidentDetailViewModel,
    LoadState,
    ResourceDetailViewModel,
    ViewModel,
)


class DetailModal(ModalScreen):
    """
    Modal screen rendering a single entity from its detail view model

    The body follows the view model's load state: a loading line, an error
    line when the initial load failed, or the rendered entity. A failed
    refresh keeps the rendered entity and shows a notification instead.
    """

    CSS_PATH = "modal.tcss"
    BINDINGS = [
        Binding(key="escape", action="dismiss", description="dismiss"),
        Binding(key="r", action="refresh", description="refresh"),
    ]

    title_text = "Details"

    def __init__(self, view_model: ViewModel):
        super().__init__()
        self.view_model = view_model
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Grid(
            Label(self.title_text, id="modal-title"),
            VerticalScroll(Static("Loading...", id="modal-body")),
            Label("esc to close, r to refresh", id="modal-hint"),
            id="dialog",
        )

    def on_mount(self) -> None:
        self._unsubscribe = self.view_model.subscribe(self._on_change)
        self.load()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    @work(exclusive=True)
    async def load(self) -> None:
        await self.view_model.load_if_needed()

    @work(exclusive=True)
    async def action_refresh(self) -> None:
        await self.view_model.refresh()
        if self.view_model.refresh_error is not None:
            self.notify(
                f"Refresh failed: {self.view_model.refresh_error}", severity="error"
            )
            self.view_model.dismiss_refresh_error()

    def _on_change(self, view_model: ViewModel) -> None:
        body = self.query_one("#modal-body", Static)
        if view_model.state == LoadState.FAILED:
            body.update(f"[red]Failed to load: {view_model.error}[/]")
        elif view_model.state == LoadState.LOADED:
            body.update("\n".join(self.render_lines()))
        elif view_model.state == LoadState.LOADING:
            body.update("Loading...")

    def render_lines(self) -> List[str]:
        raise NotImplementedError


class ResourceDetailModal(DetailModal):
    title_text = "Resource"

    def __init__(self, view_model: ResourceDetailViewModel):
        super().__init__(view_model)

    def render_lines(self) -> List[str]:
        vm = self.view_model
        resource = vm.resource
        lines = [
            f"[bold]{resource.name}[/]  {status_markup(vm.status.current_status)}",
            f"Type: {resource.resource_type.display_name}",
        ]
        if resource.url:
            lines.append(f"URL: {resource.url}")
        if resource.description:
            lines.append(resource.description)
        if vm.status.last_checked_at:
            lines.append(f"Last checked: {time_ago(vm.status.last_checked_at)}")
        lines.append(
            f"Uptime 24h {format_percent(vm.uptime.uptime_24h)}  "
            f"7d {format_percent(vm.uptime.uptime_7d)}  "
            f"30d {format_percent(vm.uptime.uptime_30d)}  "
            f"90d {format_percent(vm.uptime.uptime_90d)}"
        )
        lines.append("")
        lines.append(f"[bold]Checks ({len(vm.monitoring_checks)})[/]")
        for check in vm.monitoring_checks:
            state = "enabled" if check.is_enabled else "disabled"
            lines.append(
                f"  {check.name}  {check.check_type} every {check.interval}s ({state})"
            )
        return lines


class AlertDetailModal(DetailModal):
    title_text = "Alert"
    BINDINGS = DetailModal.BINDINGS + [
        Binding(key="a", action="acknowledge", description="acknowledge"),
        Binding(key="x", action="resolve", description="resolve"),
    ]

    def __init__(self, view_model: AlertDetailViewModel):
        super().__init__(view_model)

    def render_lines(self) -> List[str]:
        alert = self.view_model.alert
        lines = [
            f"[bold]{alert.title}[/]",
            f"Severity: {alert.severity.display_name}   Status: {alert.status.value}",
            f"Triggered: {time_ago(alert.triggered_at)}",
        ]
        if alert.acknowledged_at:
            lines.append(f"Acknowledged: {time_ago(alert.acknowledged_at)}")
        if alert.resolved_at:
            lines.append(f"Resolved: {time_ago(alert.resolved_at)}")
        lines.extend(["", alert.message, "", "a to acknowledge, x to resolve"])
        return lines

    @work(exclusive=True)
    async def action_acknowledge(self) -> None:
        if await self.view_model.acknowledge():
            self.notify("Alert acknowledged")
        elif self.view_model.action_error is not None:
            self.notify(str(self.view_model.action_error), severity="error")

    @work(exclusive=True)
    async def action_resolve(self) -> None:
        if await self.view_model.resolve():
            self.notify("Alert resolved")
        elif self.view_model.action_error is not None:
            self.notify(str(self.view_model.action_error), severity="error")


class ClientDetailModal(DetailModal):
    title_text = "Client"

    def __init__(self, view_model: ClientDetailViewModel):
        super().__init__(view_model)

    def render_lines(self) -> List[str]:
        client = self.view_model.client
        lines = [f"[bold]{client.name}[/]  ({client.status.value})"]
        if client.contact_email:
            lines.append(f"Contact: {client.contact_email}")
        if client.monthly_hosting_fee is not None:
            lines.append(f"Monthly hosting: {format_cost(client.monthly_hosting_fee)}")
        if client.description:
            lines.append(client.description)
        lines.append("")
        lines.append(f"[bold]Environments ({len(self.view_model.environments)})[/]")
        for environment in self.view_model.environments:
            group = environment.azure_resource_group or "no resource group"
            lines.append(f"  {environment.name}  {group}")
        return lines


class IncidentDetailModal(DetailModal):
    title_text = "Incident"

    def __init__(self, view_model: IncidentDetailViewModel):
        super().__init__(view_model)

    def render_lines(self) -> List[str]:
        incident = self.view_model.incident
        lines = [
            f"[bold]{incident.title}[/]",
            f"Severity: {incident.severity.display_name}   "
            f"Status: {incident.status.value}",
        ]
        if incident.created_at:
            lines.append(f"Opened: {time_ago(incident.created_at)}")
        if incident.resolved_at:
            lines.append(f"Resolved: {time_ago(incident.resolved_at)}")
        if incident.description:
            lines.extend(["", incident.description])
        if incident.resolution_notes:
            lines.extend(["", f"Resolution: {incident.resolution_notes}"])
        return lines
