from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from quartz_monitor.core.config import settings


QueryPairs = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Endpoint:
    """
    Describes a single API call

    Attributes:
        path: Path relative to the API base URL
        method: HTTP method
        query: Ordered query parameters, optional ones omitted when unset
        json: Request body, if any
    """

    path: str
    method: str = "GET"
    query: QueryPairs = ()
    json: Optional[Dict[str, Any]] = field(default=None, compare=False)

    @property
    def params(self) -> Dict[str, str]:
        return dict(self.query)


def _query(**params: Any) -> QueryPairs:
    return tuple((name, str(value)) for name, value in params.items() if value is not None)


def _limit(limit: int | None) -> int:
    return settings.DEFAULT_LIST_LIMIT if limit is None else limit


# Dashboard


def dashboard_summary() -> Endpoint:
    return Endpoint("/dashboard/summary")


# Clients


def clients(status: str | None = None, limit: int | None = None, offset: int = 0) -> Endpoint:
    return Endpoint("/clients", query=_query(status=status, limit=_limit(limit), offset=offset))


def client(client_id: UUID) -> Endpoint:
    return Endpoint(f"/clients/{client_id}")


def client_environments(client_id: UUID) -> Endpoint:
    return Endpoint(f"/clients/{client_id}/environments")


# Resources


def resources(
    status: str | None = None,
    resource_type: str | None = None,
    client_id: UUID | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> Endpoint:
    return Endpoint(
        "/resources",
        query=_query(
            status=status,
            resource_type=resource_type,
            client_id=client_id,
            limit=_limit(limit),
            offset=offset,
        ),
    )


def resource(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/resources/{resource_id}")


def resource_status(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/resources/{resource_id}/status")


def resource_uptime(resource_id: UUID, period: str = "30d") -> Endpoint:
    return Endpoint(f"/resources/{resource_id}/uptime", query=_query(period=period))


def monitoring_checks(resource_id: UUID | None = None) -> Endpoint:
    return Endpoint("/monitoring-checks", query=_query(resource_id=resource_id))


# Alerts


def alerts(
    severity: str | None = None,
    status: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> Endpoint:
    return Endpoint(
        "/alerts",
        query=_query(severity=severity, status=status, limit=_limit(limit), offset=offset),
    )


def alert(alert_id: UUID) -> Endpoint:
    return Endpoint(f"/alerts/{alert_id}")


def acknowledge_alert(alert_id: UUID) -> Endpoint:
    return Endpoint(f"/alerts/{alert_id}/acknowledge", method="PUT")


def resolve_alert(alert_id: UUID) -> Endpoint:
    return Endpoint(f"/alerts/{alert_id}/resolve", method="PUT")


def alert_rules() -> Endpoint:
    return Endpoint("/alert-rules")


def alert_templates(
    rule_type: str | None = None, azure_resource_type: str | None = None
) -> Endpoint:
    return Endpoint(
        "/alert-templates",
        query=_query(rule_type=rule_type, azure_resource_type=azure_resource_type),
    )


# Incidents


def incidents(
    status: str | None = None,
    severity: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> Endpoint:
    return Endpoint(
        "/incidents",
        query=_query(status=status, severity=severity, limit=_limit(limit), offset=offset),
    )


def incident(incident_id: UUID) -> Endpoint:
    return Endpoint(f"/incidents/{incident_id}")


# Azure


def azure_tenants() -> Endpoint:
    return Endpoint("/azure/tenants")


def azure_resources(
    tenant_id: UUID | None = None, page: int = 1, per_page: int | None = None
) -> Endpoint:
    return Endpoint(
        "/azure/resources",
        query=_query(
            tenant_id=tenant_id,
            page=page,
            per_page=settings.PAGE_SIZE if per_page is None else per_page,
        ),
    )


def azure_resource(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/resources/{resource_id}")


def azure_resource_metrics(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/resources/{resource_id}/metrics")


def azure_resource_costs(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/resources/{resource_id}/costs")


def azure_costs(
    tenant_id: UUID | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    page: int = 1,
    per_page: int | None = None,
) -> Endpoint:
    return Endpoint(
        "/azure/costs",
        query=_query(
            tenant_id=tenant_id,
            date_from=date_from,
            date_to=date_to,
            page=page,
            per_page=settings.PAGE_SIZE if per_page is None else per_page,
        ),
    )


# SQL


def sql_databases_overview(tenant_id: UUID | None = None) -> Endpoint:
    return Endpoint("/sql/databases/overview", query=_query(tenant_id=tenant_id))


def sql_database(database_id: UUID) -> Endpoint:
    return Endpoint(f"/sql/databases/{database_id}")


def sql_performance(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/sql/{resource_id}/performance")


def sql_insights(resource_id: UUID, limit: int = 20) -> Endpoint:
    return Endpoint(f"/azure/sql/{resource_id}/insights", query=_query(limit=limit))


def sql_wait_statistics(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/sql/{resource_id}/wait-stats")


def sql_recommendations(resource_id: UUID) -> Endpoint:
    return Endpoint(f"/azure/sql/{resource_id}/recommendations")
