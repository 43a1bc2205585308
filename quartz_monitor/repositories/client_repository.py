from typing import List
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.client import (
    Client,
    ClientWithEnvironments,
    DeploymentEnvironment,
)


class ClientRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_clients(
        self, status: str | None = None, limit: int | None = None, offset: int = 0
    ) -> List[Client]:
        return await self.api.request(
            endpoints.clients(status=status, limit=limit, offset=offset), List[Client]
        )

    async def fetch_client(self, client_id: UUID) -> Client:
        return await self.api.request(endpoints.client(client_id), Client)

    async def fetch_client_environments(
        self, client_id: UUID
    ) -> List[DeploymentEnvironment]:
        """
        Fetch the environments of a client

        The endpoint answers with the client record, environments nested inside.
        """
        client = await self.api.request(
            endpoints.client_environments(client_id), ClientWithEnvironments
        )
        return client.environments or []
