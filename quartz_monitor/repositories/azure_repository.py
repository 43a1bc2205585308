from typing import List, Optional
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.azure import (
    AzureCostRecord,
    AzureResource,
    AzureResourceCostRecord,
    AzureResourceMetricRecord,
    AzureTenant,
)
from quartz_monitor.models.pagination import PagedRequest, PageResult
from quartz_monitor.utils.aggregation import CostSummary, DailyCost, cost_summary, daily_costs
from quartz_monitor.utils.pagination import ProgressCallback, fetch_all_pages


class AzureRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_tenants(self) -> List[AzureTenant]:
        return await self.api.request(endpoints.azure_tenants(), List[AzureTenant])

    async def _resources_page(self, request: PagedRequest) -> PageResult[AzureResource]:
        items, meta = await self.api.request_with_meta(
            endpoints.azure_resources(
                tenant_id=request.filter.get("tenant_id"),
                page=request.page,
                per_page=request.page_size,
            ),
            List[AzureResource],
        )
        return PageResult(items=items, total_pages=meta.total_pages if meta else None)

    async def fetch_resources(
        self,
        tenant_id: UUID | None = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[AzureResource]:
        """
        Fetch every Azure resource, following pagination
        Args:
            tenant_id: Optional tenant filter
            on_progress: Called with (page, total_pages) after each page
        Returns:
            All resources in server order
        """
        return await fetch_all_pages(
            self._resources_page,
            filter={"tenant_id": tenant_id},
            on_progress=on_progress,
        )

    async def fetch_resource(self, resource_id: UUID) -> AzureResource:
        return await self.api.request_single_or_matching(
            endpoints.azure_resource(resource_id),
            AzureResource,
            resource_id,
            resource="Azure resource",
        )

    async def fetch_resource_metrics(
        self, resource_id: UUID
    ) -> List[AzureResourceMetricRecord]:
        return await self.api.request_array_or_empty(
            endpoints.azure_resource_metrics(resource_id), AzureResourceMetricRecord
        )

    async def fetch_resource_costs(
        self, resource_id: UUID
    ) -> List[AzureResourceCostRecord]:
        return await self.api.request_array_or_empty(
            endpoints.azure_resource_costs(resource_id), AzureResourceCostRecord
        )

    async def _costs_page(self, request: PagedRequest) -> PageResult[AzureCostRecord]:
        items, meta = await self.api.request_with_meta(
            endpoints.azure_costs(
                page=request.page, per_page=request.page_size, **request.filter
            ),
            List[AzureCostRecord],
        )
        return PageResult(items=items, total_pages=meta.total_pages if meta else None)

    async def fetch_cost_records(
        self,
        tenant_id: UUID | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[AzureCostRecord]:
        """
        Fetch every raw cost record in the date range, following pagination
        Args:
            tenant_id: Optional tenant filter
            date_from: Inclusive start date (YYYY-MM-DD)
            date_to: Inclusive end date (YYYY-MM-DD)
            on_progress: Called with (page, total_pages) after each page
        Returns:
            All cost records in server order
        """
        return await fetch_all_pages(
            self._costs_page,
            filter={"tenant_id": tenant_id, "date_from": date_from, "date_to": date_to},
            on_progress=on_progress,
        )

    async def fetch_cost_summary(
        self,
        tenant_id: UUID | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> CostSummary:
        return cost_summary(await self.fetch_cost_records(tenant_id, date_from, date_to))

    async def fetch_cost_trend(
        self,
        tenant_id: UUID | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> List[DailyCost]:
        return daily_costs(await self.fetch_cost_records(tenant_id, date_from, date_to))
