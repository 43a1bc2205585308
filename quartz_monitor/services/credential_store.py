import json
import os
from typing import Dict
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from quartz_monitor.core.logging import LogContext

logger = LogContext(__name__)


class StoredCredentials(BaseModel):
    api_key: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class CredentialStore:
    """
    API key and OAuth tokens persisted to a JSON file readable only by the
    current user
    """

    def __init__(self, path: str):
        self.path = path
        self.credentials = self._load()

    def _load(self) -> StoredCredentials:
        if not os.path.exists(self.path):
            return StoredCredentials()
        try:
            with open(self.path, "r") as f:
                return StoredCredentials.model_validate(json.load(f))
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.warning(
                "Ignoring unreadable credentials file",
                extra={
                    "path": self.path,
                    "error": str(e),
                    "error_type": e.__class__.__name__,
                },
            )
            return StoredCredentials()

    def _save(self) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w") as f:
            f.write(self.credentials.model_dump_json())
        os.chmod(self.path, 0o600)

    @property
    def api_key(self) -> str | None:
        return self.credentials.api_key

    @property
    def access_token(self) -> str | None:
        return self.credentials.access_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self.credentials.api_key or self.credentials.access_token)

    def auth_headers(self) -> Dict[str, str]:
        """API key takes precedence over the OAuth access token"""
        if self.credentials.api_key:
            return {"X-API-Key": self.credentials.api_key}
        if self.credentials.access_token:
            return {"Authorization": f"Bearer {self.credentials.access_token}"}
        return {}

    def save_api_key(self, api_key: str) -> None:
        self.credentials = self.credentials.model_copy(update={"api_key": api_key})
        self._save()

    def save_tokens(self, access_token: str, refresh_token: str) -> None:
        self.credentials = self.credentials.model_copy(
            update={"access_token": access_token, "refresh_token": refresh_token}
        )
        self._save()

    def clear(self) -> None:
        self.credentials = StoredCredentials()
        if os.path.exists(self.path):
            os.remove(self.path)

    def save_from_callback(self, url: str) -> bool:
        """
        Store the tokens carried by an auth callback URL

        Tokens may arrive in the fragment or the query string. Returns False,
        leaving the stored credentials alone, when no access token is present.
        """
        parts = urlsplit(url)
        params = parse_qs(parts.fragment or parts.query)
        access_token = params.get("access_token", [None])[0]
        if not access_token:
            logger.warning("Auth callback carried no access token")
            return False
        refresh_token = params.get("refresh_token", [""])[0]
        self.save_tokens(access_token, refresh_token)
        logger.info("Signed in from auth callback")
        return True
