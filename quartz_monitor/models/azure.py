from datetime import datetime
from decimal import Decimal
from typing import Dict
from uuid import UUID

from pydantic import BaseModel, field_validator


COMPUTE_VM_RESOURCE_TYPE = "microsoft.compute/virtualmachines"


class AzureTenant(BaseModel):
    id: UUID
    name: str
    tenant_id: str
    subscription_id: str
    is_enabled: bool = True
    last_sync_at: datetime | None = None
    created_at: datetime | None = None

    @field_validator("is_enabled", mode="before")
    @classmethod
    def enabled_when_null(cls, value):
        return True if value is None else value


class AzureResourceSku(BaseModel):
    name: str | None = None
    tier: str | None = None


class AzureTenantInfo(BaseModel):
    name: str | None = None


class AzureResource(BaseModel):
    id: UUID
    azure_tenant_id: UUID
    azure_resource_id: str
    name: str
    resource_type: str
    location: str
    resource_group: str
    tags: Dict[str, str] | None = None
    kind: str | None = None
    synced_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sku: AzureResourceSku | None = None
    optimization_score: int | None = None
    azure_tenants: AzureTenantInfo | None = None

    @property
    def is_sql_virtual_machine(self) -> bool:
        return "sqlvirtualmachine" in self.resource_type.lower()

    @property
    def is_compute_vm(self) -> bool:
        return self.resource_type.lower() == COMPUTE_VM_RESOURCE_TYPE

    @property
    def tenant_name(self) -> str | None:
        return self.azure_tenants.name if self.azure_tenants else None


class AzureResourceMetricRecord(BaseModel):
    """One metric sample of an Azure resource"""

    id: UUID
    azure_resource_id: UUID | None = None
    metric_name: str | None = None
    metric_namespace: str | None = None
    timestamp_utc: datetime | None = None
    average: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    total: float | None = None
    count: int | None = None
    unit: str | None = None
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.metric_name or self.metric_namespace or "Unknown"

    @property
    def display_value(self) -> str:
        value = self.average if self.average is not None else self.total
        if value is None:
            return "--"
        if value >= 1_000_000_000:
            return f"{value / 1_000_000_000:.1f}GB"
        if value >= 1_000_000:
            return f"{value / 1_000_000:.1f}MB"
        if value >= 1_000:
            return f"{value / 1_000:.1f}KB"
        if 0 < value < 1:
            return f"{value:.2f}"
        return f"{value:.0f}"


class AzureResourceCostRecord(BaseModel):
    """Daily cost of a single Azure resource"""

    id: UUID
    azure_resource_id: UUID | None = None
    date: str | None = None
    cost: float | None = None
    currency: str | None = None
    created_at: datetime | None = None


class AzureCostRecord(BaseModel):
    """Raw cost line from the tenant-wide cost export"""

    id: UUID
    azure_tenant_id: UUID
    azure_resource_id: str
    resource_group: str
    cost_amount: Decimal
    currency: str
    usage_date: str
    meter_category: str | None = None
    meter_subcategory: str | None = None
    meter_name: str | None = None
    usage_quantity: float | None = None
    usage_unit: str | None = None
    billing_period: str | None = None
    created_at: datetime | None = None
