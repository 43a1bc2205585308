from typing import Dict, List
from uuid import UUID

from quartz_monitor.models.sql import (
    SQLDatabase,
    SQLDatabaseOverview,
    SQLPerformanceStats,
    SQLQueryInsight,
    SQLRecommendation,
    SQLWaitStatistic,
)
from quartz_monitor.repositories.sql_repository import SQLRepository
from quartz_monitor.utils.aggregation import (
    above_threshold,
    average_of,
    filter_items,
    integer_average,
)
from quartz_monitor.viewmodels.base import ViewModel
from quartz_monitor.viewmodels.loader import load_settled


class SQLDatabaseDetailViewModel(ViewModel):
    """
    A SQL database and its diagnostic panels

    The database record is required; performance, query insights, wait
    statistics and recommendations are loaded best-effort once it is known,
    so a failing panel stays empty without affecting the others.
    """

    def __init__(self, repository: SQLRepository, database_id: UUID):
        super().__init__()
        self.repository = repository
        self.database_id = database_id
        self.database: SQLDatabase | None = None
        self.performance: SQLPerformanceStats | None = None
        self.query_insights: List[SQLQueryInsight] = []
        self.wait_statistics: List[SQLWaitStatistic] = []
        self.recommendations: List[SQLRecommendation] = []

    async def _fetch(self) -> Dict:
        database = await self.repository.fetch_database(self.database_id)
        panels = await load_settled(
            {
                "performance": lambda: self.repository.fetch_performance(self.database_id),
                "query_insights": lambda: self.repository.fetch_query_insights(
                    self.database_id
                ),
                "wait_statistics": lambda: self.repository.fetch_wait_statistics(
                    self.database_id
                ),
                "recommendations": lambda: self.repository.fetch_recommendations(
                    self.database_id
                ),
            },
            defaults={"query_insights": [], "wait_statistics": [], "recommendations": []},
        )
        return {"database": database, **panels}

    def _apply(self, result: Dict) -> None:
        self.database = result["database"]
        self.performance = result["performance"]
        self.query_insights = result["query_insights"]
        self.wait_statistics = result["wait_statistics"]
        self.recommendations = result["recommendations"]


def _cpu(database: SQLDatabaseOverview) -> float | None:
    return database.cpu_percent


def _dtu(database: SQLDatabaseOverview) -> float | None:
    return database.dtu_percent


def _storage(database: SQLDatabaseOverview) -> float | None:
    return database.storage_percent


class SQLOverviewViewModel(ViewModel):
    def __init__(self, repository: SQLRepository):
        super().__init__()
        self.repository = repository
        self.databases: List[SQLDatabaseOverview] = []
        self.search_text = ""
        self.selected_tenant_id: UUID | None = None

    async def _fetch(self) -> List[SQLDatabaseOverview]:
        return await self.repository.fetch_databases_overview(self.selected_tenant_id)

    def _apply(self, databases: List[SQLDatabaseOverview]) -> None:
        self.databases = databases

    @property
    def filtered_databases(self) -> List[SQLDatabaseOverview]:
        return filter_items(self.databases, self.search_text)

    @property
    def total_databases(self) -> int:
        return len(self.databases)

    @property
    def average_cpu_percent(self) -> float:
        return average_of(self.databases, _cpu)

    @property
    def average_dtu_percent(self) -> float:
        return average_of(self.databases, _dtu)

    @property
    def average_storage_percent(self) -> float:
        return average_of(self.databases, _storage)

    @property
    def average_health_score(self) -> int:
        return integer_average(database.optimization_score for database in self.databases)

    @property
    def high_cpu_databases(self) -> List[SQLDatabaseOverview]:
        return above_threshold(self.databases, _cpu)

    @property
    def high_storage_databases(self) -> List[SQLDatabaseOverview]:
        return above_threshold(self.databases, _storage)
