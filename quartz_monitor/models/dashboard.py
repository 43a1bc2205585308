from pydantic import BaseModel


class ResourceStatusCounts(BaseModel):
    up: int
    down: int | None = None
    degraded: int | None = None
    unknown: int | None = None

    @property
    def total(self) -> int:
        return self.up + (self.down or 0) + (self.degraded or 0) + (self.unknown or 0)

    @property
    def healthy_percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.up / self.total * 100


class DashboardSummary(BaseModel):
    clients_count: int
    resources_count: int
    active_alerts_count: int
    open_incidents_count: int
    resource_status: ResourceStatusCounts
