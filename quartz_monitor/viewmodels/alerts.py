from typing import Awaitable, Dict, List
from uuid import UUID

from quartz_monitor.core.exceptions import MonitorAPIError, RequestCancelledError
from quartz_monitor.core.logging import LogContext
from quartz_monitor.models.alert import (
    Alert,
    AlertRule,
    AlertSeverity,
    AlertStatus,
    AlertTemplate,
)
from quartz_monitor.repositories.alert_repository import AlertRepository
from quartz_monitor.utils.aggregation import severity_counts
from quartz_monitor.viewmodels.base import ViewModel
from quartz_monitor.viewmodels.loader import load_all, load_settled

logger = LogContext(__name__)


class _AlertActions(ViewModel):
    """Acknowledge/resolve actions; a failed action leaves the loaded data alone"""

    repository: AlertRepository

    def __init__(self):
        super().__init__()
        self.action_error: MonitorAPIError | None = None

    async def _perform(self, action: str, call: Awaitable[None], alert_id: UUID) -> bool:
        self.action_error = None
        try:
            await call
        except RequestCancelledError:
            logger.debug(
                "Alert action cancelled", extra={"action": action, "alert_id": str(alert_id)}
            )
            return False
        except MonitorAPIError as e:
            logger.warning(
                "Alert action failed",
                extra={
                    "action": action,
                    "alert_id": str(alert_id),
                    "error": e.detail,
                    "error_type": e.__class__.__name__,
                },
            )
            self.action_error = e
            self._notify()
            return False

        logger.info("Alert updated", extra={"action": action, "alert_id": str(alert_id)})
        await self.refresh()
        return True


class AlertDetailViewModel(_AlertActions):
    def __init__(self, repository: AlertRepository, alert_id: UUID):
        super().__init__()
        self.repository = repository
        self.alert_id = alert_id
        self.alert: Alert | None = None

    async def _fetch(self) -> Alert:
        return await self.repository.fetch_alert(self.alert_id)

    def _apply(self, alert: Alert) -> None:
        self.alert = alert

    async def acknowledge(self) -> bool:
        if self.alert is None:
            return False
        return await self._perform(
            "acknowledge", self.repository.acknowledge_alert(self.alert.id), self.alert.id
        )

    async def resolve(self) -> bool:
        if self.alert is None:
            return False
        return await self._perform(
            "resolve", self.repository.resolve_alert(self.alert.id), self.alert.id
        )


class AlertsListViewModel(_AlertActions):
    """Alerts plus, when available, the configured rules and templates"""

    def __init__(self, repository: AlertRepository, widgets=None):
        super().__init__()
        self.repository = repository
        self.widgets = widgets
        self.alerts: List[Alert] = []
        self.alert_rules: List[AlertRule] = []
        self.alert_templates: List[AlertTemplate] = []
        self.selected_severity: AlertSeverity | None = None
        self.selected_status: AlertStatus | None = None

    async def _fetch(self) -> Dict:
        return await load_all(
            {
                "alerts": self.repository.fetch_alerts,
                "extras": lambda: load_settled(
                    {
                        "rules": self.repository.fetch_alert_rules,
                        "templates": self.repository.fetch_alert_templates,
                    },
                    defaults={"rules": [], "templates": []},
                ),
            }
        )

    def _apply(self, result: Dict) -> None:
        self.alerts = result["alerts"]
        self.alert_rules = result["extras"]["rules"]
        self.alert_templates = result["extras"]["templates"]
        if self.widgets is not None:
            self.widgets.update_from_alerts(self.alerts)

    @property
    def filtered_alerts(self) -> List[Alert]:
        return [
            alert
            for alert in self.alerts
            if (self.selected_severity is None or alert.severity == self.selected_severity)
            and (self.selected_status is None or alert.status == self.selected_status)
        ]

    def _with_status(self, status: AlertStatus) -> List[Alert]:
        return [alert for alert in self.filtered_alerts if alert.status == status]

    @property
    def active_alerts(self) -> List[Alert]:
        return self._with_status(AlertStatus.ACTIVE)

    @property
    def acknowledged_alerts(self) -> List[Alert]:
        return self._with_status(AlertStatus.ACKNOWLEDGED)

    @property
    def resolved_alerts(self) -> List[Alert]:
        return self._with_status(AlertStatus.RESOLVED)

    @property
    def severity_counts(self) -> Dict[AlertSeverity, int]:
        return severity_counts(self.alerts)

    async def acknowledge_alert(self, alert: Alert) -> bool:
        return await self._perform(
            "acknowledge", self.repository.acknowledge_alert(alert.id), alert.id
        )

    async def resolve_alert(self, alert: Alert) -> bool:
        return await self._perform(
            "resolve", self.repository.resolve_alert(alert.id), alert.id
        )
