from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from quartz_monitor.core.exceptions import NetworkError, ServerError
from quartz_monitor.viewmodels import (
    AzureOverviewViewModel,
    AzureResourceDetailViewModel,
    LoadState,
)
from tests.factories import (
    AzureCostRecordFactory,
    AzureResourceCostRecordFactory,
    AzureResourceFactory,
    AzureResourceMetricRecordFactory,
    AzureTenantFactory,
)

SQL_VM_TYPE = "Microsoft.SqlVirtualMachine/SqlVirtualMachines"


class TestAzureResourceDetailViewModel:
    @pytest.mark.asyncio
    async def test_loads_costs_and_metrics(self):
        resource = AzureResourceFactory()
        repository = MagicMock()
        repository.fetch_resource = AsyncMock(return_value=resource)
        repository.fetch_resource_costs = AsyncMock(
            return_value=[
                AzureResourceCostRecordFactory(cost=2.5),
                AzureResourceCostRecordFactory(cost=None),
                AzureResourceCostRecordFactory(cost=1.5),
            ]
        )
        repository.fetch_resource_metrics = AsyncMock(
            return_value=[AzureResourceMetricRecordFactory()]
        )
        vm = AzureResourceDetailViewModel(repository, resource.id)

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.total_cost == 4.0
        assert list(vm.latest_metrics) == ["Percentage CPU"]
        assert vm.linked_compute_vm is None
        repository.fetch_resources.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_costs_do_not_fail_the_load(self):
        resource = AzureResourceFactory()
        repository = MagicMock()
        repository.fetch_resource = AsyncMock(return_value=resource)
        repository.fetch_resource_costs = AsyncMock(side_effect=ServerError())
        repository.fetch_resource_metrics = AsyncMock(
            return_value=[AzureResourceMetricRecordFactory()]
        )
        vm = AzureResourceDetailViewModel(repository, resource.id)

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.cost_records == []
        assert len(vm.metric_records) == 1

    @pytest.mark.asyncio
    async def test_sql_vm_borrows_metrics_from_compute_vm(self):
        sql_vm = AzureResourceFactory(name="SQL-01", resource_type=SQL_VM_TYPE)
        compute_vm = AzureResourceFactory(name="sql-01")
        other_vm = AzureResourceFactory(name="web-01")
        vm_metrics = [AzureResourceMetricRecordFactory(azure_resource_id=compute_vm.id)]
        vm_costs = [AzureResourceCostRecordFactory(cost=12.0)]

        repository = MagicMock()
        repository.fetch_resource = AsyncMock(return_value=sql_vm)
        repository.fetch_resources = AsyncMock(return_value=[other_vm, sql_vm, compute_vm])
        repository.fetch_resource_metrics = AsyncMock(
            side_effect=lambda resource_id: [] if resource_id == sql_vm.id else vm_metrics
        )
        repository.fetch_resource_costs = AsyncMock(
            side_effect=lambda resource_id: [] if resource_id == sql_vm.id else vm_costs
        )
        vm = AzureResourceDetailViewModel(repository, sql_vm.id)

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.linked_compute_vm == compute_vm
        assert vm.metric_records == vm_metrics
        assert vm.cost_records == vm_costs

    @pytest.mark.asyncio
    async def test_sql_vm_keeps_its_own_costs(self):
        sql_vm = AzureResourceFactory(name="sql-02", resource_type=SQL_VM_TYPE)
        compute_vm = AzureResourceFactory(name="sql-02")
        own_costs = [AzureResourceCostRecordFactory(cost=3.0)]

        repository = MagicMock()
        repository.fetch_resource = AsyncMock(return_value=sql_vm)
        repository.fetch_resources = AsyncMock(return_value=[compute_vm])
        repository.fetch_resource_metrics = AsyncMock(
            side_effect=lambda resource_id: []
            if resource_id == sql_vm.id
            else [AzureResourceMetricRecordFactory()]
        )
        repository.fetch_resource_costs = AsyncMock(
            side_effect=lambda resource_id: own_costs
            if resource_id == sql_vm.id
            else [AzureResourceCostRecordFactory(cost=99.0)]
        )
        vm = AzureResourceDetailViewModel(repository, sql_vm.id)

        await vm.load_if_needed()

        assert vm.cost_records == own_costs
        assert len(vm.metric_records) == 1

    @pytest.mark.asyncio
    async def test_linked_vm_lookup_failure_is_tolerated(self):
        sql_vm = AzureResourceFactory(resource_type=SQL_VM_TYPE)
        repository = MagicMock()
        repository.fetch_resource = AsyncMock(return_value=sql_vm)
        repository.fetch_resources = AsyncMock(side_effect=NetworkError())
        repository.fetch_resource_metrics = AsyncMock(return_value=[])
        repository.fetch_resource_costs = AsyncMock(return_value=[])
        vm = AzureResourceDetailViewModel(repository, sql_vm.id)

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.linked_compute_vm is None
        assert vm.metric_records == []


@pytest.fixture
def azure_repository():
    tenant = AzureTenantFactory()
    repository = MagicMock()
    repository.fetch_tenants = AsyncMock(return_value=[tenant])
    repository.fetch_resources = AsyncMock(
        return_value=[
            AzureResourceFactory(),
            AzureResourceFactory(),
            AzureResourceFactory(resource_type="Microsoft.Sql/servers/databases"),
        ]
    )

    async def fetch_cost_records(tenant_id, date_from, date_to, on_progress):
        for page in (1, 2):
            on_progress(page, 2)
        return [
            AzureCostRecordFactory(
                azure_tenant_id=tenant.id, usage_date="2025-03-02", cost_amount=Decimal("4")
            ),
            AzureCostRecordFactory(
                azure_tenant_id=tenant.id, usage_date="2025-03-01", cost_amount=Decimal("6")
            ),
        ]

    repository.fetch_cost_records = AsyncMock(side_effect=fetch_cost_records)
    return repository


class TestAzureOverviewViewModel:
    @pytest.mark.asyncio
    async def test_loads_overview_with_costs(self, azure_repository):
        vm = AzureOverviewViewModel(azure_repository, today=date(2025, 3, 31))
        statuses = []
        vm.subscribe(lambda model: statuses.append(model.loading_status))

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.resource_count == 3
        assert len(vm.resources_by_type["Microsoft.Compute/virtualMachines"]) == 2
        assert vm.cost_summary.total_cost == Decimal("10")
        assert [day.date for day in vm.cost_trend] == ["2025-03-01", "2025-03-02"]
        assert vm.loading_progress == 1.0
        assert "Loading costs: page 2 of 2" in statuses
        azure_repository.fetch_cost_records.assert_awaited_once()
        kwargs = azure_repository.fetch_cost_records.await_args.kwargs
        assert kwargs["date_from"] == "2025-03-02"
        assert kwargs["date_to"] == "2025-03-31"

    @pytest.mark.asyncio
    async def test_cost_failure_still_loads_overview(self, azure_repository):
        azure_repository.fetch_cost_records = AsyncMock(side_effect=NetworkError())
        vm = AzureOverviewViewModel(azure_repository)

        await vm.load_if_needed()

        assert vm.state == LoadState.LOADED
        assert vm.resource_count == 3
        assert vm.cost_summary is None
        assert vm.cost_trend == []

    @pytest.mark.asyncio
    async def test_resource_failure_fails_the_load(self, azure_repository):
        azure_repository.fetch_resources = AsyncMock(side_effect=ServerError())
        vm = AzureOverviewViewModel(azure_repository)

        await vm.load_if_needed()

        assert vm.state == LoadState.FAILED
        azure_repository.fetch_cost_records.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_select_tenant_reloads_with_filter(self, azure_repository):
        vm = AzureOverviewViewModel(azure_repository)
        await vm.load_if_needed()
        tenant = vm.tenants[0]

        await vm.select_tenant(tenant)

        assert azure_repository.fetch_resources.await_args.kwargs == {"tenant_id": tenant.id}
        assert azure_repository.fetch_cost_records.await_args.kwargs["tenant_id"] == tenant.id

    @pytest.mark.asyncio
    async def test_update_date_range(self, azure_repository):
        vm = AzureOverviewViewModel(azure_repository)
        await vm.load_if_needed()

        await vm.update_date_range(date(2025, 1, 1), date(2025, 1, 31))

        kwargs = azure_repository.fetch_cost_records.await_args.kwargs
        assert kwargs["date_from"] == "2025-01-01"
        assert kwargs["date_to"] == "2025-01-31"
