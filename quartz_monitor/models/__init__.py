from .alert import Alert, AlertRule, AlertRuleType, AlertSeverity, AlertStatus, AlertTemplate
from .azure import (
    AzureCostRecord,
    AzureResource,
    AzureResourceCostRecord,
    AzureResourceMetricRecord,
    AzureTenant,
)
from .client import Client, ClientStatus, ClientWithEnvironments, DeploymentEnvironment
from .dashboard import DashboardSummary, ResourceStatusCounts
from .envelope import APIResponse, APIErrorResponse
from .incident import Incident, IncidentStatus
from .pagination import PagedRequest, PageResult, PaginationMeta
from .resource import (
    MonitoringCheck,
    Resource,
    ResourceStatus,
    ResourceStatusResponse,
    ResourceType,
    ResourceUptimeResponse,
)
from .sql import (
    SQLDatabase,
    SQLDatabaseOverview,
    SQLLatestStats,
    SQLPerformanceStats,
    SQLQueryInsight,
    SQLRecommendation,
    SQLWaitStatistic,
)

__all__ = [
    "Alert",
    "AlertRule",
    "AlertRuleType",
    "AlertSeverity",
    "AlertStatus",
    "AlertTemplate",
    "AzureCostRecord",
    "AzureResource",
    "AzureResourceCostRecord",
    "AzureResourceMetricRecord",
    "AzureTenant",
    "Client",
    "ClientStatus",
    "ClientWithEnvironments",
    "DeploymentEnvironment",
    "DashboardSummary",
    "ResourceStatusCounts",
    "APIResponse",
    "APIErrorResponse",
    "Incident",
    "IncidentStatus",
    "PagedRequest",
    "PageResult",
    "PaginationMeta",
    "MonitoringCheck",
    "Resource",
    "ResourceStatus",
    "ResourceStatusResponse",
    "ResourceType",
    "ResourceUptimeResponse",
    "SQLDatabase",
    "SQLDatabaseOverview",
    "SQLLatestStats",
    "SQLPerformanceStats",
    "SQLQueryInsight",
    "SQLRecommendation",
    "SQLWaitStatistic",
]
