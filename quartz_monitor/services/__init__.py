from .credential_store import CredentialStore
from .user_settings import UserPreferences, UserSettingsService
from .widget_data import WidgetDataProvider

__all__ = [
    "CredentialStore",
    "UserPreferences",
    "UserSettingsService",
    "WidgetDataProvider",
]
