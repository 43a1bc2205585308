from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        raw = str(value).lower()
        if raw in ("critical", "high", "error"):
            return cls.CRITICAL
        if raw in ("warning", "medium"):
            return cls.WARNING
        return cls.INFO

    @property
    def display_name(self) -> str:
        return self.value.upper()


class AlertStatus(str, Enum):
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"


class AlertRuleType(str, Enum):
    THRESHOLD = "threshold"
    STATUS_CHANGE = "status_change"
    NO_DATA = "no_data"
    ANOMALY = "anomaly"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.THRESHOLD


class Alert(BaseModel):
    id: UUID
    message: str
    severity: AlertSeverity
    triggered_at: datetime
    resource_id: UUID | None = None
    acknowledged_at: datetime | None = None
    resolved_at: datetime | None = None
    resource_name: str | None = None
    is_active: bool | None = None
    is_acknowledged: bool | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, value):
        return AlertSeverity.parse(value)

    @property
    def title(self) -> str:
        return self.resource_name or "Alert"

    @property
    def status(self) -> AlertStatus:
        """Resolution wins over acknowledgement; everything else is active"""
        if self.resolved_at is not None:
            return AlertStatus.RESOLVED
        if self.acknowledged_at is not None or self.is_acknowledged:
            return AlertStatus.ACKNOWLEDGED
        return AlertStatus.ACTIVE


def _lenient_rule_type(value):
    return AlertRuleType.THRESHOLD if value is None else AlertRuleType.parse(value)


def _lenient_rule_severity(value):
    if value is None:
        return AlertSeverity.WARNING
    return AlertSeverity.parse(value)


class AlertRule(BaseModel):
    id: UUID
    name: str
    rule_type: AlertRuleType = AlertRuleType.THRESHOLD
    is_enabled: bool = True
    severity: AlertSeverity = AlertSeverity.WARNING
    description: str | None = None
    resource_id: UUID | None = None
    threshold: float | None = None
    threshold_operator: str | None = None
    duration: int | None = None
    cooldown_minutes: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("rule_type", mode="before")
    @classmethod
    def parse_rule_type(cls, value):
        return _lenient_rule_type(value)

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, value):
        return _lenient_rule_severity(value)

    @field_validator("is_enabled", mode="before")
    @classmethod
    def enabled_when_null(cls, value):
        return True if value is None else value


class AlertTemplate(BaseModel):
    id: UUID
    name: str
    rule_type: AlertRuleType = AlertRuleType.THRESHOLD
    severity: AlertSeverity = AlertSeverity.WARNING
    description: str | None = None
    azure_resource_type: str | None = None
    threshold: float | None = None
    threshold_operator: str | None = None
    duration: int | None = None
    cooldown_minutes: int | None = None
    is_built_in: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("rule_type", mode="before")
    @classmethod
    def parse_rule_type(cls, value):
        return _lenient_rule_type(value)

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, value):
        return _lenient_rule_severity(value)

    @field_validator("is_built_in", mode="before")
    @classmethod
    def built_in_when_null(cls, value):
        return False if value is None else value
