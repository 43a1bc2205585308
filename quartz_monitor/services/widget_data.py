import json
import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List

from pydantic import BaseModel, Field

from quartz_monitor.core.logging import LogContext
from quartz_monitor.models.alert import Alert, AlertSeverity
from quartz_monitor.models.dashboard import DashboardSummary
from quartz_monitor.models.resource import Resource
from quartz_monitor.utils.aggregation import severity_counts
from quartz_monitor.utils.formatters import time_ago

logger = LogContext(__name__)


class AlertWidgetData(BaseModel):
    title: str
    severity: str
    time_ago: str


class ResourceWidgetData(BaseModel):
    name: str
    status: str
    type: str


class DashboardWidgetData(BaseModel):
    healthy_resources: int = 0
    warning_resources: int = 0
    critical_resources: int = 0
    unknown_resources: int = 0
    uptime_percentage: float = 0.0


class AlertsWidgetData(BaseModel):
    critical_alerts: int = 0
    warning_alerts: int = 0
    info_alerts: int = 0
    recent_alerts: List[AlertWidgetData] = Field(default_factory=list)


class WidgetSnapshot(BaseModel):
    dashboard: DashboardWidgetData = Field(default_factory=DashboardWidgetData)
    alerts: AlertsWidgetData = Field(default_factory=AlertsWidgetData)
    recent_resources: List[ResourceWidgetData] = Field(default_factory=list)
    updated_at: datetime | None = None


class WidgetDataProvider:
    """
    Mirrors summarized state into a JSON snapshot that widgets read

    Each write replaces one section of the snapshot and then notifies the
    reload listeners with the section name.
    """

    def __init__(self, path: str):
        self.path = path
        self.snapshot = WidgetSnapshot()
        self._reload_listeners: List[Callable[[str], None]] = []

    def add_reload_listener(self, listener: Callable[[str], None]) -> None:
        self._reload_listeners.append(listener)

    def _write(self, section: str, **values: Any) -> None:
        self.snapshot = self.snapshot.model_copy(
            update={**values, "updated_at": datetime.now(timezone.utc)}
        )
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w") as f:
                f.write(self.snapshot.model_dump_json(indent=2))
        except OSError as e:
            logger.warning(
                "Could not write widget snapshot",
                extra={"section": section, "path": self.path, "error": str(e)},
            )
            return

        logger.debug("Widget snapshot updated", extra={"section": section})
        for listener in list(self._reload_listeners):
            listener(section)

    def update_from_dashboard_summary(self, summary: DashboardSummary) -> None:
        counts = summary.resource_status
        self._write(
            "dashboard",
            dashboard=DashboardWidgetData(
                healthy_resources=counts.up,
                warning_resources=counts.degraded or 0,
                critical_resources=counts.down or 0,
                unknown_resources=counts.unknown or 0,
                uptime_percentage=counts.healthy_percentage,
            ),
        )

    def update_from_alerts(self, alerts: List[Alert], now: datetime | None = None) -> None:
        counts = severity_counts(alerts)
        self._write(
            "alerts",
            alerts=AlertsWidgetData(
                critical_alerts=counts[AlertSeverity.CRITICAL],
                warning_alerts=counts[AlertSeverity.WARNING],
                info_alerts=counts[AlertSeverity.INFO],
                recent_alerts=[
                    AlertWidgetData(
                        title=alert.title,
                        severity=alert.severity.value,
                        time_ago=time_ago(alert.triggered_at, now),
                    )
                    for alert in alerts[:5]
                ],
            ),
        )

    def update_from_resources(self, resources: Iterable[Resource]) -> None:
        self._write(
            "resources",
            recent_resources=[
                ResourceWidgetData(
                    name=resource.name,
                    status=resource.status.value,
                    type=resource.resource_type.display_name,
                )
                for resource in list(resources)[:10]
            ],
        )

    def read(self) -> Dict[str, Any]:
        with open(self.path, "r") as f:
            return json.load(f)
