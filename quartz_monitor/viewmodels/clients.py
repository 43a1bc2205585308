from typing import Dict, List
from uuid import UUID

from quartz_monitor.models.client import Client, ClientStatus, DeploymentEnvironment
from quartz_monitor.repositories.client_repository import ClientRepository
from quartz_monitor.utils.aggregation import filter_items
from quartz_monitor.viewmodels.base import ViewModel
from quartz_monitor.viewmodels.loader import load_all


class ClientDetailViewModel(ViewModel):
    def __init__(self, repository: ClientRepository, client_id: UUID):
        super().__init__()
        self.repository = repository
        self.client_id = client_id
        self.client: Client | None = None
        self.environments: List[DeploymentEnvironment] = []

    async def _fetch(self) -> Dict:
        return await load_all(
            {
                "client": lambda: self.repository.fetch_client(self.client_id),
                "environments": lambda: self.repository.fetch_client_environments(
                    self.client_id
                ),
            }
        )

    def _apply(self, result: Dict) -> None:
        self.client = result["client"]
        self.environments = result["environments"]


class ClientsListViewModel(ViewModel):
    def __init__(self, repository: ClientRepository):
        super().__init__()
        self.repository = repository
        self.clients: List[Client] = []
        self.search_text = ""
        self.selected_status: ClientStatus | None = None

    async def _fetch(self) -> List[Client]:
        return await self.repository.fetch_clients()

    def _apply(self, clients: List[Client]) -> None:
        self.clients = clients

    @property
    def filtered_clients(self) -> List[Client]:
        return filter_items(self.clients, self.search_text, status=self.selected_status)
