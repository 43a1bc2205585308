from typing import List
from uuid import UUID

from quartz_monitor.models.incident import Incident, IncidentStatus
from quartz_monitor.repositories.incident_repository import IncidentRepository
from quartz_monitor.utils.aggregation import filter_items
from quartz_monitor.viewmodels.base import ViewModel


class IncidentDetailViewModel(ViewModel):
    def __init__(self, repository: IncidentRepository, incident_id: UUID):
        super().__init__()
        self.repository = repository
        self.incident_id = incident_id
        self.incident: Incident | None = None

    async def _fetch(self) -> Incident:
        return await self.repository.fetch_incident(self.incident_id)

    def _apply(self, incident: Incident) -> None:
        self.incident = incident


class IncidentsListViewModel(ViewModel):
    def __init__(self, repository: IncidentRepository):
        super().__init__()
        self.repository = repository
        self.incidents: List[Incident] = []
        self.selected_status: IncidentStatus | None = None

    async def _fetch(self) -> List[Incident]:
        return await self.repository.fetch_incidents()

    def _apply(self, incidents: List[Incident]) -> None:
        self.incidents = incidents

    @property
    def filtered_incidents(self) -> List[Incident]:
        return filter_items(
            self.incidents, name_of=lambda incident: incident.title, status=self.selected_status
        )
