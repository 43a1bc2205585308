import uuid
from datetime import datetime, timezone
from decimal import Decimal

import factory

from quartz_monitor.models import (
    Alert,
    AlertSeverity,
    AzureCostRecord,
    AzureResource,
    AzureResourceCostRecord,
    AzureResourceMetricRecord,
    AzureTenant,
    Client,
    ClientStatus,
    DashboardSummary,
    Incident,
    IncidentStatus,
    MonitoringCheck,
    Resource,
    ResourceStatus,
    ResourceStatusCounts,
    ResourceType,
    SQLDatabaseOverview,
    SQLLatestStats,
)

TEST_TIMESTAMP = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def payload(model) -> dict:
    """JSON-ready dict of a model, as the API would send it"""
    return model.model_dump(mode="json")


class BaseFactory(factory.Factory):
    class Meta:
        abstract = True

    id = factory.LazyFunction(uuid.uuid4)


class ResourceFactory(BaseFactory):
    class Meta:
        model = Resource

    name = factory.Sequence(lambda n: f"resource-{n}")
    resource_type = ResourceType.WEBSITE
    status = ResourceStatus.UP
    last_checked_at = TEST_TIMESTAMP
    url = factory.LazyAttribute(lambda o: f"https://{o.name}.example.com")


class MonitoringCheckFactory(BaseFactory):
    class Meta:
        model = MonitoringCheck

    resource_id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f"check-{n}")


class ClientFactory(BaseFactory):
    class Meta:
        model = Client

    name = factory.Sequence(lambda n: f"Client {n}")
    status = ClientStatus.ACTIVE
    contact_email = factory.LazyAttribute(
        lambda o: f"ops@{o.name.lower().replace(' ', '')}.example.com"
    )


class AlertFactory(BaseFactory):
    class Meta:
        model = Alert

    message = factory.Sequence(lambda n: f"Alert {n} fired")
    severity = AlertSeverity.WARNING
    triggered_at = TEST_TIMESTAMP
    resource_name = factory.Sequence(lambda n: f"resource-{n}")
    is_active = True


class IncidentFactory(BaseFactory):
    class Meta:
        model = Incident

    title = factory.Sequence(lambda n: f"Incident {n}")
    severity = AlertSeverity.CRITICAL
    status = IncidentStatus.OPEN
    created_at = TEST_TIMESTAMP


class DashboardSummaryFactory(factory.Factory):
    class Meta:
        model = DashboardSummary

    clients_count = 3
    resources_count = 10
    active_alerts_count = 2
    open_incidents_count = 1
    resource_status = factory.LazyFunction(
        lambda: ResourceStatusCounts(up=7, down=1, degraded=1, unknown=1)
    )


class AzureTenantFactory(BaseFactory):
    class Meta:
        model = AzureTenant

    name = factory.Sequence(lambda n: f"Tenant {n}")
    tenant_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    subscription_id = factory.LazyFunction(lambda: str(uuid.uuid4()))


class AzureResourceFactory(BaseFactory):
    class Meta:
        model = AzureResource

    azure_tenant_id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f"vm-{n}")
    azure_resource_id = factory.LazyAttribute(
        lambda o: f"/subscriptions/sub/resourceGroups/rg/providers/{o.resource_type}/{o.name}"
    )
    resource_type = "Microsoft.Compute/virtualMachines"
    location = "westeurope"
    resource_group = "rg-prod"


class AzureCostRecordFactory(BaseFactory):
    class Meta:
        model = AzureCostRecord

    azure_tenant_id = factory.LazyFunction(uuid.uuid4)
    azure_resource_id = factory.Sequence(lambda n: f"/subscriptions/sub/resource-{n}")
    resource_group = "rg-prod"
    cost_amount = Decimal("10.00")
    currency = "USD"
    usage_date = "2025-03-01"
    meter_category = "Virtual Machines"


class AzureResourceCostRecordFactory(BaseFactory):
    class Meta:
        model = AzureResourceCostRecord

    date = "2025-03-01"
    cost = 5.0
    currency = "USD"


class AzureResourceMetricRecordFactory(BaseFactory):
    class Meta:
        model = AzureResourceMetricRecord

    metric_name = "Percentage CPU"
    timestamp_utc = TEST_TIMESTAMP
    average = 42.0
    unit = "Percent"


class SQLDatabaseOverviewFactory(BaseFactory):
    class Meta:
        model = SQLDatabaseOverview

    name = factory.Sequence(lambda n: f"sqldb-{n}")
    tenant_name = "Tenant 1"
    latest_stats = factory.LazyFunction(
        lambda: SQLLatestStats(cpu_percent=20.0, dtu_percent=30.0, storage_percent=40.0)
    )
    recommendation_count = 0
