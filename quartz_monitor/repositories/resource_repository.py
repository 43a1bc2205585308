from typing import List
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.resource import (
    MonitoringCheck,
    Resource,
    ResourceStatusResponse,
    ResourceUptimeResponse,
)


class ResourceRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_resources(
        self,
        status: str | None = None,
        resource_type: str | None = None,
        client_id: UUID | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Resource]:
        """
        Fetch monitored resources
        Args:
            status: Optional status filter
            resource_type: Optional resource type filter
            client_id: Optional owning client filter
            limit: Maximum number of resources to return
            offset: Number of resources to skip
        Returns:
            List of Resource objects
        """
        return await self.api.request(
            endpoints.resources(
                status=status,
                resource_type=resource_type,
                client_id=client_id,
                limit=limit,
                offset=offset,
            ),
            List[Resource],
        )

    async def fetch_resource(self, resource_id: UUID) -> Resource:
        return await self.api.request(endpoints.resource(resource_id), Resource)

    async def fetch_resource_status(self, resource_id: UUID) -> ResourceStatusResponse:
        return await self.api.request(
            endpoints.resource_status(resource_id), ResourceStatusResponse
        )

    async def fetch_resource_uptime(
        self, resource_id: UUID, period: str = "30d"
    ) -> ResourceUptimeResponse:
        return await self.api.request(
            endpoints.resource_uptime(resource_id, period), ResourceUptimeResponse
        )

    async def fetch_monitoring_checks(self, resource_id: UUID) -> List[MonitoringCheck]:
        return await self.api.request_array_or_empty(
            endpoints.monitoring_checks(resource_id), MonitoringCheck
        )
