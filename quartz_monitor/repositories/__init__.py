from .alert_repository import AlertRepository
from .azure_repository import AzureRepository
from .client_repository import ClientRepository
from .dashboard_repository import DashboardRepository
from .incident_repository import IncidentRepository
from .resource_repository import ResourceRepository
from .sql_repository import SQLRepository

__all__ = [
    "AlertRepository",
    "AzureRepository",
    "ClientRepository",
    "DashboardRepository",
    "IncidentRepository",
    "ResourceRepository",
    "SQLRepository",
]
