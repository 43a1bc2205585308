from quartz_monitor.models.dashboard import DashboardSummary
from quartz_monitor.repositories.dashboard_repository import DashboardRepository
from quartz_monitor.viewmodels.base import ViewModel


class DashboardViewModel(ViewModel):
    def __init__(self, repository: DashboardRepository, widgets=None):
        super().__init__()
        self.repository = repository
        self.widgets = widgets
        self.summary: DashboardSummary | None = None

    async def _fetch(self) -> DashboardSummary:
        return await self.repository.fetch_summary()

    def _apply(self, summary: DashboardSummary) -> None:
        self.summary = summary
        if self.widgets is not None:
            self.widgets.update_from_dashboard_summary(summary)
