from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List
from uuid import UUID

from pydantic import BaseModel, field_validator


class ClientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.ACTIVE


class ClientEnvironmentSummary(BaseModel):
    id: UUID | None = None
    name: str | None = None


class Client(BaseModel):
    id: UUID
    name: str
    status: ClientStatus
    contact_email: str | None = None
    description: str | None = None
    monthly_hosting_fee: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    environments: List[ClientEnvironmentSummary] | None = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return ClientStatus.parse(value)


class EnvironmentClientInfo(BaseModel):
    name: str | None = None


class DeploymentEnvironment(BaseModel):
    id: UUID
    name: str
    client_id: UUID | None = None
    description: str | None = None
    azure_tenant_id: UUID | None = None
    azure_resource_group: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    clients: EnvironmentClientInfo | None = None

    @property
    def client_name(self) -> str | None:
        return self.clients.name if self.clients else None


class ClientWithEnvironments(BaseModel):
    """Client detail payload that nests the full environment records"""

    id: UUID
    name: str
    environments: List[DeploymentEnvironment] | None = None
