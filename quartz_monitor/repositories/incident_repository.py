from typing import List
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.incident import Incident


class IncidentRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_incidents(
        self,
        status: str | None = None,
        severity: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Incident]:
        return await self.api.request(
            endpoints.incidents(status=status, severity=severity, limit=limit, offset=offset),
            List[Incident],
        )

    async def fetch_incident(self, incident_id: UUID) -> Incident:
        # the detail endpoint sometimes answers with a one-element list
        return await self.api.request_single_or_matching(
            endpoints.incident(incident_id), Incident, incident_id, resource="Incident"
        )
