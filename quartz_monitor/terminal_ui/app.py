from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Input, Label

from quartz_monitor.core.container import ServiceContainer
from quartz_monitor.core.logging import LogContext
from quartz_monitor.navigation.deep_link import (
    AlertLink,
    AuthCallback,
    ClientLink,
    DeepLink,
    IncidentLink,
    ResourceLink,
)
from quartz_monitor.terminal_ui.modals import (
    AlertDetailModal,
    ClientDetailModal,
    IncidentDetailModal,
    ResourceDetailModal,
)
from quartz_monitor.terminal_ui.widgets import ResourcesTable, SearchInput, SummaryHeader
from quartz_monitor.viewmodels import (
    AlertDetailViewModel,
    ClientDetailViewModel,
    DashboardViewModel,
    IncidentDetailViewModel,
    LoadState,
    ResourceDetailViewModel,
    ResourcesListViewModel,
)

logger = LogContext(__name__)


class QuartzMonitorApp(App):
    """Terminal dashboard for the monitoring API"""

    CSS_PATH = "styles.tcss"
    BINDINGS = [
        Binding(key="q", action="quit", description="quit"),
        Binding(key="r", action="refresh", description="refresh"),
        Binding(key="/", action="search", description="search"),
        Binding(key="c", action="clear_filters", description="clear search"),
        Binding(key="enter", action="open_resource", description="open"),
    ]

    def __init__(self, services: ServiceContainer, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.services = services
        self.dashboard = DashboardViewModel(services.dashboard, widgets=services.widgets)
        self.resources = ResourcesListViewModel(services.resources, widgets=services.widgets)

    def compose(self) -> ComposeResult:
        yield Container(
            SummaryHeader(id="summary"),
            Label("", id="resources-error", classes="hidden"),
            ResourcesTable(id="resources"),
            id="main-container",
        )
        yield SearchInput(id="search-input")
        yield Footer()

    async def on_mount(self) -> None:
        self.dashboard.subscribe(lambda _: self._render_dashboard())
        self.resources.subscribe(lambda _: self._render_resources())
        self.load()

        link = self.services.deep_links.consume()
        if link is not None:
            self.open_deep_link(link)

    async def action_quit(self) -> None:
        await self.services.aclose()
        self.exit()

    @work(exclusive=True, group="load")
    async def load(self) -> None:
        await self.dashboard.load_if_needed()
        await self.resources.load_if_needed()

    @work(exclusive=True, group="load")
    async def action_refresh(self) -> None:
        await self.dashboard.refresh()
        await self.resources.refresh()

        for view_model in (self.dashboard, self.resources):
            if view_model.refresh_error is not None:
                self.notify(f"Refresh failed: {view_model.refresh_error}", severity="error")
                view_model.dismiss_refresh_error()

    def _render_dashboard(self) -> None:
        header = self.query_one("#summary", SummaryHeader)
        if self.dashboard.state == LoadState.FAILED:
            header.show_error(self.dashboard.error)
        elif self.dashboard.summary is not None:
            header.show_summary(self.dashboard.summary)

    def _render_resources(self) -> None:
        table = self.query_one("#resources", ResourcesTable)
        error_label = self.query_one("#resources-error", Label)
        if self.resources.state == LoadState.FAILED:
            error_label.update(f"[red]Failed to load resources: {self.resources.error}[/]")
            error_label.remove_class("hidden")
            table.add_class("hidden")
            return
        error_label.add_class("hidden")
        table.remove_class("hidden")
        table.show_resources(self.resources.filtered_resources)

    def action_search(self):
        search_input = self.query_one("#search-input", SearchInput)
        search_input.display = True
        search_input.value = self.resources.search_text
        search_input.focus()

    def action_clear_filters(self):
        self.query_one("#search-input", SearchInput).value = ""
        self.resources.clear_filters()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.resources.search_text = event.value
        self._render_resources()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#search-input", SearchInput).action_exit_search_mode()

    def action_open_resource(self):
        resource_id = self.query_one("#resources", ResourcesTable).selected_resource_id()
        if resource_id is not None:
            self.open_deep_link(ResourceLink(id=resource_id))

    def on_data_table_row_selected(self, event: ResourcesTable.RowSelected) -> None:
        self.action_open_resource()

    def open_deep_link(self, link: DeepLink) -> None:
        """Navigate to the screen a deep link points at"""
        logger.info("Opening deep link", extra={"link_type": link.__class__.__name__})
        if isinstance(link, ResourceLink):
            self.push_screen(
                ResourceDetailModal(ResourceDetailViewModel(self.services.resources, link.id))
            )
        elif isinstance(link, AlertLink):
            self.push_screen(
                AlertDetailModal(AlertDetailViewModel(self.services.alerts, link.id))
            )
        elif isinstance(link, ClientLink):
            self.push_screen(
                ClientDetailModal(ClientDetailViewModel(self.services.clients, link.id))
            )
        elif isinstance(link, IncidentLink):
            self.push_screen(
                IncidentDetailModal(
                    IncidentDetailViewModel(self.services.incidents, link.id)
                )
            )
        elif isinstance(link, AuthCallback):
            if self.services.credentials.save_from_callback(link.url):
                self.notify("Signed in")
                self.action_refresh()
            else:
                self.notify("Sign-in failed: no token in callback", severity="error")
