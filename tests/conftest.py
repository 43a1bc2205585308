import json
import os

os.environ.setdefault("ENVIRONMENT", "testing")

import httpx
import pytest

from quartz_monitor.clients.api import APIClient
from quartz_monitor.services.credential_store import CredentialStore
from quartz_monitor.services.widget_data import WidgetDataProvider

TEST_BASE_URL = "https://monitor.test/v1"


def envelope(data=None, success=True, error=None, meta=None) -> dict:
    """Build an API response envelope"""
    body = {"success": success, "data": data}
    if error is not None:
        body["error"] = error
    if meta is not None:
        body["meta"] = meta
    return body


def json_response(body, status_code: int = 200, headers=None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body, default=str).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


class RecordingTransport:
    """Handler for httpx.MockTransport that records every request it answers"""

    def __init__(self, handler=None):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def credentials(tmp_path):
    store = CredentialStore(str(tmp_path / "credentials.json"))
    store.save_api_key("test-key")
    return store


@pytest.fixture
def make_api_client(credentials):
    """Factory building an APIClient whose transport is the given handler"""
    def _make(handler, with_credentials=True):
        transport = RecordingTransport(handler)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        api = APIClient(
            base_url=TEST_BASE_URL,
            credentials=credentials if with_credentials else None,
            http_client=http_client,
        )
        api.transport = transport
        return api

    return _make


@pytest.fixture
def widgets(tmp_path):
    return WidgetDataProvider(str(tmp_path / "widgets.json"))
