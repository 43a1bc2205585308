import uuid
from unittest.mock import MagicMock

import pytest

from quartz_monitor.navigation.deep_link import (
    AlertLink,
    AuthCallback,
    ClientLink,
    DeepLinkRouter,
    IncidentLink,
    ResourceLink,
    parse,
)

ITEM_ID = uuid.UUID("3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b")


class TestParse:
    @pytest.mark.parametrize(
        "route,link_class",
        [
            ("resource", ResourceLink),
            ("alert", AlertLink),
            ("client", ClientLink),
            ("incident", IncidentLink),
        ],
    )
    def test_routes(self, route, link_class):
        assert parse(f"quartzmonitor://{route}?id={ITEM_ID}") == link_class(id=ITEM_ID)

    def test_uppercase_id_and_host(self):
        link = parse(f"quartzmonitor://ALERT?id={str(ITEM_ID).upper()}")

        assert link == AlertLink(id=ITEM_ID)

    def test_route_matches_regardless_of_scheme(self):
        assert parse(f"https://resource?id={ITEM_ID}") == ResourceLink(id=ITEM_ID)

    def test_first_id_parameter_wins(self):
        other = uuid.uuid4()

        assert parse(f"quartzmonitor://resource?id={ITEM_ID}&id={other}") == ResourceLink(
            id=ITEM_ID
        )

    def test_auth_callback(self):
        url = "quartzmonitor://auth-callback#access_token=abc&refresh_token=def"

        assert parse(url) == AuthCallback(url=url)

    def test_auth_callback_needs_app_scheme(self):
        assert parse("https://auth-callback#access_token=abc") is None

    @pytest.mark.parametrize(
        "url",
        [
            "quartzmonitor://resource",
            "quartzmonitor://resource?id=",
            "quartzmonitor://resource?id=not-a-uuid",
            "quartzmonitor://resource?id=3f2b8c1e9a4d4e6f8b7a1c2d3e4f5a6b",
            f"quartzmonitor://dashboard?id={ITEM_ID}",
            f"quartzmonitor:///resource?id={ITEM_ID}",
            "not a url",
            "",
            "http://[::1",
        ],
    )
    def test_invalid_links(self, url):
        assert parse(url) is None


class TestDeepLinkRouter:
    def test_handle_sets_pending(self):
        router = DeepLinkRouter()

        link = router.handle(f"quartzmonitor://resource?id={ITEM_ID}")

        assert link == ResourceLink(id=ITEM_ID)
        assert router.pending == link

    def test_newer_link_replaces_pending(self):
        router = DeepLinkRouter()
        router.handle(f"quartzmonitor://resource?id={ITEM_ID}")

        router.handle(f"quartzmonitor://alert?id={ITEM_ID}")

        assert router.pending == AlertLink(id=ITEM_ID)

    def test_invalid_link_keeps_pending(self):
        router = DeepLinkRouter()
        router.handle(f"quartzmonitor://incident?id={ITEM_ID}")

        assert router.handle("quartzmonitor://incident?id=bogus") is None
        assert router.pending == IncidentLink(id=ITEM_ID)

    def test_consume_clears_pending(self):
        router = DeepLinkRouter()
        router.handle(f"quartzmonitor://client?id={ITEM_ID}")

        assert router.consume() == ClientLink(id=ITEM_ID)
        assert router.pending is None
        assert router.consume() is None

    def test_clear_pending(self):
        router = DeepLinkRouter()
        router.handle(f"quartzmonitor://client?id={ITEM_ID}")

        router.clear_pending_deep_link()

        assert router.pending is None

    def test_listeners_are_notified(self):
        router = DeepLinkRouter()
        listener = MagicMock()
        router.subscribe(listener)

        router.handle(f"quartzmonitor://alert?id={ITEM_ID}")
        router.handle("quartzmonitor://alert")
        router.consume()

        assert [c.args[0] for c in listener.call_args_list] == [AlertLink(id=ITEM_ID), None]
