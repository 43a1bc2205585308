import httpx
import pytest

from quartz_monitor.core.config import Settings
from quartz_monitor.core.container import ServiceContainer


@pytest.mark.asyncio
async def test_container_wires_services(tmp_path):
    config = Settings(
        DATA_DIR=str(tmp_path),
        API_KEY="seeded-key",
        API_BASE_URL="https://monitor.test/v1/",
    )
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(204))
    )

    services = ServiceContainer(config, http_client=http_client)

    assert services.credentials.api_key == "seeded-key"
    assert services.api.base_url == "https://monitor.test/v1"
    assert services.sql.api is services.api
    assert (tmp_path / "credentials.json").exists()

    await services.aclose()
    await http_client.aclose()


def test_stored_key_is_not_overwritten(tmp_path):
    ServiceContainer(Settings(DATA_DIR=str(tmp_path), API_KEY="first"))

    services = ServiceContainer(Settings(DATA_DIR=str(tmp_path), API_KEY="second"))

    assert services.credentials.api_key == "first"
