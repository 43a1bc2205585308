from typing import List
from uuid import UUID

from quartz_monitor.clients import endpoints
from quartz_monitor.clients.api import APIClient
from quartz_monitor.models.sql import (
    SQLDatabase,
    SQLDatabaseOverview,
    SQLPerformanceStats,
    SQLQueryInsight,
    SQLRecommendation,
    SQLWaitStatistic,
)


class SQLRepository:
    def __init__(self, api: APIClient):
        self.api = api

    async def fetch_databases_overview(
        self, tenant_id: UUID | None = None
    ) -> List[SQLDatabaseOverview]:
        return await self.api.request_array_or_empty(
            endpoints.sql_databases_overview(tenant_id), SQLDatabaseOverview
        )

    async def fetch_database(self, database_id: UUID) -> SQLDatabase:
        return await self.api.request_single_or_matching(
            endpoints.sql_database(database_id),
            SQLDatabase,
            database_id,
            resource="SQL database",
        )

    async def fetch_performance(self, database_id: UUID) -> SQLPerformanceStats | None:
        """
        Latest performance sample of a database

        The endpoint answers with a list of samples for most databases and
        with a single object for some; the list shape is tried first.
        """
        samples = await self.api.request_array_or_empty(
            endpoints.sql_performance(database_id), SQLPerformanceStats
        )
        if samples:
            return samples[0]
        return await self.api.request_optional(
            endpoints.sql_performance(database_id), SQLPerformanceStats
        )

    async def fetch_query_insights(
        self, database_id: UUID, limit: int = 20
    ) -> List[SQLQueryInsight]:
        return await self.api.request_array_or_empty(
            endpoints.sql_insights(database_id, limit), SQLQueryInsight
        )

    async def fetch_wait_statistics(self, database_id: UUID) -> List[SQLWaitStatistic]:
        return await self.api.request_array_or_empty(
            endpoints.sql_wait_statistics(database_id), SQLWaitStatistic
        )

    async def fetch_recommendations(self, database_id: UUID) -> List[SQLRecommendation]:
        return await self.api.request_array_or_empty(
            endpoints.sql_recommendations(database_id), SQLRecommendation
        )
