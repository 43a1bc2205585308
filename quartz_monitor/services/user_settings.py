import json
import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from quartz_monitor.core.logging import LogContext

logger = LogContext(__name__)


class Theme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class DashboardTab(str, Enum):
    OVERVIEW = "overview"
    RESOURCES = "resources"
    ALERTS = "alerts"


class UserPreferences(BaseModel):
    theme: Theme = Theme.SYSTEM
    biometrics_enabled: bool = False
    notifications_enabled: bool = True
    auto_refresh_enabled: bool = True
    refresh_interval_seconds: int = Field(default=30, ge=1)
    show_resource_costs: bool = True
    default_dashboard_tab: DashboardTab = DashboardTab.OVERVIEW
    compact_alert_view: bool = False
    haptic_feedback_enabled: bool = True


class UserSettingsService:
    """Local user preferences, written to disk on every change"""

    def __init__(self, path: str):
        self.path = path
        self.preferences = self._load()

    def _load(self) -> UserPreferences:
        if not os.path.exists(self.path):
            return UserPreferences()
        try:
            with open(self.path, "r") as f:
                return UserPreferences.model_validate(json.load(f))
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.warning(
                "Falling back to default preferences",
                extra={
                    "path": self.path,
                    "error": str(e),
                    "error_type": e.__class__.__name__,
                },
            )
            return UserPreferences()

    def _save(self) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w") as f:
            f.write(self.preferences.model_dump_json(indent=2))

    def update(self, **changes: Any) -> UserPreferences:
        """
        Apply and persist preference changes

        Raises:
            pydantic.ValidationError: If a value is not valid for its preference
        """
        self.preferences = UserPreferences.model_validate(
            {**self.preferences.model_dump(), **changes}
        )
        self._save()
        return self.preferences

    def reset_to_defaults(self) -> UserPreferences:
        self.preferences = UserPreferences()
        self._save()
        return self.preferences
