from typing import List
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.alert import Alert, AlertRule, AlertTemplate


class AlertRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_alerts(
        self,
        severity: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Alert]:
        return await self.api.request(
            endpoints.alerts(severity=severity, status=status, limit=limit, offset=offset),
            List[Alert],
        )

    async def fetch_alert(self, alert_id: UUID) -> Alert:
        return await self.api.request_single_or_matching(
            endpoints.alert(alert_id), Alert, alert_id, resource="Alert"
        )

    async def acknowledge_alert(self, alert_id: UUID) -> None:
        await self.api.request_void(endpoints.acknowledge_alert(alert_id))

    async def resolve_alert(self, alert_id: UUID) -> None:
        await self.api.request_void(endpoints.resolve_alert(alert_id))

    async def fetch_alert_rules(self) -> List[AlertRule]:
        return await self.api.request(endpoints.alert_rules(), List[AlertRule])

    async def fetch_alert_templates(
        self, rule_type: str | None = None, azure_resource_type: str | None = None
    ) -> List[AlertTemplate]:
        return await self.api.request_array_or_empty(
            endpoints.alert_templates(
                rule_type=rule_type, azure_resource_type=azure_resource_type
            ),
            AlertTemplate,
        )
