from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from quartz_monitor.models.azure import AzureTenantInfo


class SQLDatabase(BaseModel):
    id: UUID
    name: str
    azure_tenant_id: UUID | None = None
    azure_resource_id: str | None = None
    resource_group: str | None = None
    resource_type: str | None = None
    location: str | None = None
    kind: str | None = None
    synced_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    azure_tenants: AzureTenantInfo | None = None

    @property
    def server_name(self) -> str:
        return self.resource_group or "Unknown"

    @property
    def edition(self) -> str | None:
        return self.kind


class SQLLatestStats(BaseModel):
    cpu_percent: float | None = None
    dtu_percent: float | None = None
    storage_percent: float | None = None
    connection_count: int | None = None
    deadlock_count: int | None = None


class SQLDatabaseOverview(BaseModel):
    """Row of the SQL databases overview with the latest collected stats"""

    id: UUID
    name: str
    resource_type: str | None = None
    location: str | None = None
    tenant_name: str | None = None
    optimization_score: int | None = None
    latest_stats: SQLLatestStats | None = None
    recommendation_count: int | None = None

    @property
    def cpu_percent(self) -> float | None:
        return self.latest_stats.cpu_percent if self.latest_stats else None

    @property
    def dtu_percent(self) -> float | None:
        return self.latest_stats.dtu_percent if self.latest_stats else None

    @property
    def storage_percent(self) -> float | None:
        return self.latest_stats.storage_percent if self.latest_stats else None

    @property
    def health_score(self) -> int:
        """
        Start at 100 and deduct for CPU, DTU and storage pressure.
        Metrics that are not reported do not affect the score.
        """
        score = 100
        cpu = self.cpu_percent
        if cpu is not None:
            if cpu > 90:
                score -= 30
            elif cpu > 75:
                score -= 15
        dtu = self.dtu_percent
        if dtu is not None:
            if dtu > 90:
                score -= 30
            elif dtu > 75:
                score -= 15
        storage = self.storage_percent
        if storage is not None:
            if storage > 90:
                score -= 20
            elif storage > 80:
                score -= 10
        return max(0, score)


class SQLPerformanceStats(BaseModel):
    cpu_percent: float | None = None
    dtu_percent: float | None = None
    storage_percent: float | None = None
    connection_count: int | None = None
    deadlock_count: int | None = None
    timestamp: datetime | None = None


class SQLQueryInsight(BaseModel):
    query_hash: str | None = None
    query_text: str | None = None
    execution_count: int | None = None
    total_cpu_time_ms: float | None = None
    avg_cpu_time_ms: float | None = None
    total_duration_ms: float | None = None
    avg_duration_ms: float | None = None
    total_logical_reads: int | None = None
    avg_logical_reads: float | None = None
    total_logical_writes: int | None = None
    avg_logical_writes: float | None = None
    last_execution_time: datetime | None = None


class SQLWaitStatistic(BaseModel):
    wait_type: str
    waiting_tasks_count: int
    wait_time_ms: float
    max_wait_time_ms: float | None = None
    signal_wait_time_ms: float | None = None


class SQLRecommendation(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    type: str | None = None
    impact: str | None = None
    reason: str | None = None
    details: str | None = None
    script: str | None = None
    estimated_impact: float | None = None
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def generated_when_invalid(cls, value):
        try:
            return UUID(str(value))
        except ValueError:
            return uuid4()
