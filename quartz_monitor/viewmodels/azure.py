from datetime import date, timedelta
from typing import Dict, List, Tuple
from uuid import UUID

from quartz_monitor.core.logging import LogContext
from quartz_monitor.models.azure import (
    AzureResource,
    AzureResourceCostRecord,
    AzureResourceMetricRecord,
    AzureTenant,
)
from quartz_monitor.repositories.azure_repository import AzureRepository
from quartz_monitor.utils.aggregation import (
    CostSummary,
    DailyCost,
    cost_summary,
    daily_costs,
    latest_metrics,
)
from quartz_monitor.viewmodels.base import ViewModel
from quartz_monitor.viewmodels.loader import load_all, load_settled

logger = LogContext(__name__)


class AzureResourceDetailViewModel(ViewModel):
    """
    An Azure resource with its costs and metrics

    The resource is required; costs and metrics are best-effort. SQL virtual
    machines record no metrics of their own, so when none come back the
    compute VM with the same name is used for metrics (and for costs, if
    the SQL VM had none either).
    """

    def __init__(self, repository: AzureRepository, resource_id: UUID):
        super().__init__()
        self.repository = repository
        self.resource_id = resource_id
        self.resource: AzureResource | None = None
        self.cost_records: List[AzureResourceCostRecord] = []
        self.metric_records: List[AzureResourceMetricRecord] = []
        self.linked_compute_vm: AzureResource | None = None

    async def _fetch(self) -> Dict:
        resource = await self.repository.fetch_resource(self.resource_id)
        data = await load_settled(
            {
                "costs": lambda: self.repository.fetch_resource_costs(self.resource_id),
                "metrics": lambda: self.repository.fetch_resource_metrics(self.resource_id),
            },
            defaults={"costs": [], "metrics": []},
        )
        data["resource"] = resource
        data["linked_vm"] = None

        if not data["metrics"] and resource.is_sql_virtual_machine:
            linked = await load_settled(
                {"linked_vm": lambda: self._load_linked_compute_vm(resource)}
            )
            if linked["linked_vm"] is not None:
                vm, metrics, costs = linked["linked_vm"]
                data["linked_vm"] = vm
                data["metrics"] = metrics
                if not data["costs"]:
                    data["costs"] = costs
        return data

    async def _load_linked_compute_vm(
        self, resource: AzureResource
    ) -> Tuple[AzureResource, List, List] | None:
        name = resource.name.lower()
        candidates = await self.repository.fetch_resources()
        vm = next(
            (c for c in candidates if c.is_compute_vm and c.name.lower() == name), None
        )
        if vm is None:
            logger.info(
                "No compute VM linked to SQL virtual machine",
                extra={"resource_id": str(resource.id), "resource_name": resource.name},
            )
            return None

        logger.debug(
            "Using linked compute VM",
            extra={"resource_id": str(resource.id), "vm_id": str(vm.id)},
        )
        linked = await load_all(
            {
                "metrics": lambda: self.repository.fetch_resource_metrics(vm.id),
                "costs": lambda: self.repository.fetch_resource_costs(vm.id),
            }
        )
        return vm, linked["metrics"], linked["costs"]

    def _apply(self, result: Dict) -> None:
        self.resource = result["resource"]
        self.cost_records = result["costs"]
        self.metric_records = result["metrics"]
        self.linked_compute_vm = result["linked_vm"]

    @property
    def total_cost(self) -> float:
        return sum(record.cost for record in self.cost_records if record.cost is not None)

    @property
    def latest_metrics(self) -> Dict[str, AzureResourceMetricRecord]:
        return latest_metrics(self.metric_records)


class AzureOverviewViewModel(ViewModel):
    """
    Tenants, resources and the cost picture for a date range

    Tenants and resources are required. Cost records are paginated and
    best-effort: when they fail the overview still loads without costs.
    ``loading_progress`` runs from 0 to 1 over the steps.
    """

    def __init__(self, repository: AzureRepository, today: date | None = None):
        super().__init__()
        self.repository = repository
        self.tenants: List[AzureTenant] = []
        self.resources: List[AzureResource] = []
        self.cost_summary: CostSummary | None = None
        self.cost_trend: List[DailyCost] = []
        self.selected_tenant: AzureTenant | None = None

        self.loading_progress = 0.0
        self.loading_status = ""

        today = today or date.today()
        self.date_to = today
        self.date_from = today - timedelta(days=29)

    @property
    def resource_count(self) -> int:
        return len(self.resources)

    @property
    def resources_by_type(self) -> Dict[str, List[AzureResource]]:
        grouped: Dict[str, List[AzureResource]] = {}
        for resource in self.resources:
            grouped.setdefault(resource.resource_type, []).append(resource)
        return grouped

    def _progress(self, value: float, status: str) -> None:
        self.loading_progress = value
        self.loading_status = status
        self._notify()

    def _cost_page_loaded(self, page: int, total_pages: int) -> None:
        self._progress(
            0.5 + page / max(total_pages, 1) * 0.4,
            f"Loading costs: page {page} of {total_pages}",
        )

    async def _fetch(self) -> Dict:
        tenant_id = self.selected_tenant.id if self.selected_tenant else None

        self._progress(0.0, "Loading tenants...")
        tenants = await self.repository.fetch_tenants()

        self._progress(0.2, "Loading resources...")
        resources = await self.repository.fetch_resources(tenant_id=tenant_id)

        self._progress(0.5, "Loading cost data...")
        costs = await load_settled(
            {
                "records": lambda: self.repository.fetch_cost_records(
                    tenant_id=tenant_id,
                    date_from=self.date_from.isoformat(),
                    date_to=self.date_to.isoformat(),
                    on_progress=self._cost_page_loaded,
                )
            }
        )

        self._progress(1.0, "Complete")
        return {"tenants": tenants, "resources": resources, "cost_records": costs["records"]}

    def _apply(self, result: Dict) -> None:
        self.tenants = result["tenants"]
        self.resources = result["resources"]
        records = result["cost_records"]
        if records is None:
            self.cost_summary = None
            self.cost_trend = []
        else:
            self.cost_summary = cost_summary(records)
            self.cost_trend = daily_costs(records)

    async def select_tenant(self, tenant: AzureTenant | None) -> None:
        self.selected_tenant = tenant
        await self.refresh()

    async def update_date_range(self, date_from: date, date_to: date) -> None:
        self.date_from = date_from
        self.date_to = date_to
        await self.refresh()
