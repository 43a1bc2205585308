from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.dashboard import DashboardSummary


class DashboardRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_summary(self) -> DashboardSummary:
        return await self.api.request(endpoints.dashboard_summary(), DashboardSummary)
