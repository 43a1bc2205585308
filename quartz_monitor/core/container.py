from quartz_monitor.clients.api import APIClient
from quartz_monitor.core.config import Settings, settings as default_settings
from quartz_monitor.core.logging import LogContext
from quartz_monitor.navigation.deep_link import DeepLinkRouter
from quartz_monitor.repositories import (
    AlertRepository,
    AzureRepository,
    ClientRepository,
    DashboardRepository,
    IncidentRepository,
    ResourceRepository,
    SQLRepository,
)
from quartz_monitor.services.credential_store import CredentialStore
from quartz_monitor.services.user_settings import UserSettingsService
from quartz_monitor.services.widget_data import WidgetDataProvider

logger = LogContext(__name__)


class ServiceContainer:
    """
    Builds the application's object graph from settings

    Everything is constructed once here and passed by reference; call
    ``aclose()`` on shutdown to release the HTTP connection pool.
    """

    def __init__(self, config: Settings | None = None, http_client=None):
        self.settings = config or default_settings

        self.credentials = CredentialStore(self.settings.credentials_path)
        if self.settings.API_KEY and not self.credentials.api_key:
            self.credentials.save_api_key(self.settings.API_KEY)

        self.api = APIClient(
            base_url=self.settings.API_BASE_URL,
            credentials=self.credentials,
            timeout=self.settings.REQUEST_TIMEOUT,
            http_client=http_client,
        )

        self.resources = ResourceRepository(self.api)
        self.clients = ClientRepository(self.api)
        self.alerts = AlertRepository(self.api)
        self.incidents = IncidentRepository(self.api)
        self.dashboard = DashboardRepository(self.api)
        self.azure = AzureRepository(self.api)
        self.sql = SQLRepository(self.api)

        self.user_settings = UserSettingsService(self.settings.preferences_path)
        self.widgets = WidgetDataProvider(self.settings.widget_snapshot_path)
        self.deep_links = DeepLinkRouter()

        logger.info(
            "Services initialized",
            extra={
                "api_base_url": self.settings.API_BASE_URL,
                "authenticated": self.credentials.is_authenticated,
            },
        )

    async def aclose(self) -> None:
        await self.api.aclose()
