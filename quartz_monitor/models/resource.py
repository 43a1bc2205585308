from datetime import datetime
from enum import Enum
from typing import List
from uuid import UUID

from pydantic import BaseModel, field_validator


class ResourceType(str, Enum):
    WEBSITE = "website"
    SERVER = "server"
    DATABASE = "database"
    API = "api"
    STORAGE = "storage"
    NETWORK = "network"
    VM = "vm"
    CONTAINER = "container"
    FUNCTION = "function"
    QUEUE = "queue"
    OTHER = "other"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ResourceStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value):
        """Map the status spellings the API uses onto the four known states"""
        if isinstance(value, cls):
            return value
        raw = str(value).lower()
        if raw in ("up", "healthy", "online"):
            return cls.UP
        if raw in ("down", "unhealthy", "offline"):
            return cls.DOWN
        if raw in ("degraded", "warning"):
            return cls.DEGRADED
        return cls.UNKNOWN


class ResourceClientInfo(BaseModel):
    name: str | None = None


class ResourceEnvironmentInfo(BaseModel):
    name: str | None = None
    clients: ResourceClientInfo | None = None


class Resource(BaseModel):
    id: UUID
    name: str
    resource_type: ResourceType
    status: ResourceStatus
    last_checked_at: datetime | None = None
    client_id: UUID | None = None
    environment_id: UUID | None = None
    url: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_standalone: bool | None = None
    azure_resource_id: str | None = None
    environments: ResourceEnvironmentInfo | None = None

    @field_validator("resource_type", mode="before")
    @classmethod
    def parse_resource_type(cls, value):
        return ResourceType.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return ResourceStatus.parse(value)


class ResourceStatusResponse(BaseModel):
    """The status endpoint answers with the full resource record"""

    id: UUID
    name: str
    status: ResourceStatus
    last_checked_at: datetime | None = None
    resource_type: ResourceType | None = None
    description: str | None = None
    client_id: UUID | None = None
    environment_id: UUID | None = None
    azure_resource_id: str | None = None

    @field_validator("resource_type", mode="before")
    @classmethod
    def parse_resource_type(cls, value):
        return None if value is None else ResourceType.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return ResourceStatus.parse(value)

    @property
    def current_status(self) -> ResourceStatus:
        return self.status


class ResourceUptimeResponse(ResourceStatusResponse):
    """
    The uptime endpoint also answers with the resource record; it carries no
    uptime figures, so they are derived from the current status.
    """

    def _uptime(self) -> float:
        return 100.0 if self.status == ResourceStatus.UP else 0.0

    @property
    def uptime_24h(self) -> float:
        return self._uptime()

    @property
    def uptime_7d(self) -> float:
        return self._uptime()

    @property
    def uptime_30d(self) -> float:
        return self._uptime()

    @property
    def uptime_90d(self) -> float:
        return self._uptime()


class MonitoringCheck(BaseModel):
    id: UUID
    resource_id: UUID
    name: str
    check_type: str = "http"
    is_enabled: bool = True
    interval: int = 60
    created_at: datetime | None = None

    @field_validator("check_type", "is_enabled", "interval", mode="before")
    @classmethod
    def default_when_null(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CheckResult(BaseModel):
    id: UUID
    check_id: UUID | None = None
    status: ResourceStatus
    response_time_ms: float | None = None
    checked_at: datetime | None = None
    message: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return ResourceStatus.parse(value)


ResourceList = List[Resource]
