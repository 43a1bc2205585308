from .alerts import AlertDetailViewModel, AlertsListViewModel
from .azure import AzureOverviewViewModel, AzureResourceDetailViewModel
from .base import LoadState, ViewModel
from .clients import ClientDetailViewModel, ClientsListViewModel
from .dashboard import DashboardViewModel
from .incidents import IncidentDetailViewModel, IncidentsListViewModel
from .loader import load_all, load_settled
from .resources import ResourceDetailViewModel, ResourcesListViewModel
from .sql import SQLDatabaseDetailViewModel, SQLOverviewViewModel

__all__ = [
    "AlertDetailViewModel",
    "AlertsListViewModel",
    "AzureOverviewViewModel",
    "AzureResourceDetailViewModel",
    "LoadState",
    "ViewModel",
    "ClientDetailViewModel",
    "ClientsListViewModel",
    "DashboardViewModel",
    "IncidentDetailViewModel",
    "IncidentsListViewModel",
    "load_all",
    "load_settled",
    "ResourceDetailViewModel",
    "ResourcesListViewModel",
    "SQLDatabaseDetailViewModel",
    "SQLOverviewViewModel",
]
