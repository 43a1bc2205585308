from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator

from quartz_monitor.models.alert import AlertSeverity


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OPEN


class Incident(BaseModel):
    id: UUID
    title: str
    severity: AlertSeverity
    status: IncidentStatus
    description: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, value):
        return AlertSeverity.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value):
        return IncidentStatus.parse(value)
