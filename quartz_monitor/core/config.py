import os
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"
    DEBUG: bool = False

    # Project
    PROJECT_NAME: str = "Quartz Monitor"
    VERSION: str = "1.0.0"

    # API
    API_BASE_URL: str = (
        "https://zkqhktsvhazeljnncncr.supabase.co/functions/v1/public-api/v1"
    )
    API_KEY: str | None = None
    REQUEST_TIMEOUT: float = 30.0

    # Pagination
    PAGE_SIZE: int = 100
    MAX_PAGES: int = 50
    DEFAULT_LIST_LIMIT: int = 50

    # Deep links
    DEEP_LINK_SCHEME: str = "quartzmonitor"
    AUTH_CALLBACK_HOST: str = "auth-callback"

    # Aggregation
    HIGH_UTILIZATION_THRESHOLD: float = 80.0

    # Local state
    DATA_DIR: str = os.path.expanduser("~/.quartz_monitor")

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "quartz_monitor.log"
    LOG_TO_CONSOLE: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Environment-specific configurations
        if self.ENVIRONMENT == "development":
            self.DEBUG = True
            self.LOG_LEVEL = "DEBUG"

        elif self.ENVIRONMENT == "testing":
            self.DEBUG = True
            self.LOG_LEVEL = "ERROR"  # Reduce test noise
            self.LOG_TO_CONSOLE = False

        elif self.ENVIRONMENT == "production":
            self.DEBUG = False
            self.LOG_LEVEL = "WARNING"

    @property
    def credentials_path(self) -> str:
        return os.path.join(self.DATA_DIR, "credentials.json")

    @property
    def preferences_path(self) -> str:
        return os.path.join(self.DATA_DIR, "preferences.json")

    @property
    def widget_snapshot_path(self) -> str:
        return os.path.join(self.DATA_DIR, "widgets.json")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
