from typing import Dict, List
from uuid import UUID

from quartz_monitor.models.resource import (
    MonitoringCheck,
    Resource,
    ResourceStatus,
    ResourceStatusResponse,
    ResourceType,
    ResourceUptimeResponse,
)
from quartz_monitor.repositories.resource_repository import ResourceRepository
from quartz_monitor.utils.aggregation import count_by, filter_items
from quartz_monitor.viewmodels.base import ViewModel
from quartz_monitor.viewmodels.loader import load_all


class ResourceDetailViewModel(ViewModel):
    """Resource with its status, uptime and checks, loaded together or not at all"""

    def __init__(self, repository: ResourceRepository, resource_id: UUID):
        super().__init__()
        self.repository = repository
        self.resource_id = resource_id
        self.resource: Resource | None = None
        self.status: ResourceStatusResponse | None = None
        self.uptime: ResourceUptimeResponse | None = None
        self.monitoring_checks: List[MonitoringCheck] = []

    async def _fetch(self) -> Dict:
        return await load_all(
            {
                "resource": lambda: self.repository.fetch_resource(self.resource_id),
                "status": lambda: self.repository.fetch_resource_status(self.resource_id),
                "uptime": lambda: self.repository.fetch_resource_uptime(self.resource_id),
                "checks": lambda: self.repository.fetch_monitoring_checks(self.resource_id),
            }
        )

    def _apply(self, result: Dict) -> None:
        self.resource = result["resource"]
        self.status = result["status"]
        self.uptime = result["uptime"]
        self.monitoring_checks = result["checks"]


class ResourcesListViewModel(ViewModel):
    def __init__(self, repository: ResourceRepository, widgets=None):
        super().__init__()
        self.repository = repository
        self.widgets = widgets
        self.resources: List[Resource] = []
        self.search_text = ""
        self.selected_status: ResourceStatus | None = None
        self.selected_type: ResourceType | None = None

    async def _fetch(self) -> List[Resource]:
        return await self.repository.fetch_resources()

    def _apply(self, resources: List[Resource]) -> None:
        self.resources = resources
        if self.widgets is not None:
            self.widgets.update_from_resources(resources)

    @property
    def filtered_resources(self) -> List[Resource]:
        return filter_items(
            self.resources,
            self.search_text,
            status=self.selected_status,
            resource_type=self.selected_type,
        )

    @property
    def status_counts(self) -> Dict[ResourceStatus, int]:
        return count_by(self.resources, lambda resource: resource.status)

    def clear_filters(self) -> None:
        self.search_text = ""
        self.selected_status = None
        self.selected_type = None
        self._notify()
