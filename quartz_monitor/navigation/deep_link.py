import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import parse_qs, urlsplit
from uuid import UUID

from quartz_monitor.core.config import settings
from quartz_monitor.core.logging import LogContext

logger = LogContext(__name__)

_CANONICAL_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


@dataclass(frozen=True)
class ResourceLink:
    id: UUID


@dataclass(frozen=True)
class AlertLink:
    id: UUID


@dataclass(frozen=True)
class ClientLink:
    id: UUID


@dataclass(frozen=True)
class IncidentLink:
    id: UUID


@dataclass(frozen=True)
class AuthCallback:
    url: str


DeepLink = Union[ResourceLink, AlertLink, ClientLink, IncidentLink, AuthCallback]

ROUTES: Dict[str, Callable[[UUID], DeepLink]] = {
    "resource": ResourceLink,
    "alert": AlertLink,
    "client": ClientLink,
    "incident": IncidentLink,
}


def _parse_uuid(value: str | None) -> UUID | None:
    if value is None or not _CANONICAL_UUID.match(value):
        return None
    return UUID(value)


def parse(url: str) -> Optional[DeepLink]:
    """
    Turn an activation URL into a navigation intent

    ``<scheme>://auth-callback...`` on the app's own scheme is always an
    auth callback. Otherwise the host names the route (resource, alert,
    client or incident) and the ``id`` query parameter must be a UUID.
    Anything else yields None.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except (ValueError, TypeError, AttributeError):
        logger.debug("Ignoring malformed deep link", extra={"url": repr(url)})
        return None

    if parts.scheme == settings.DEEP_LINK_SCHEME and host == settings.AUTH_CALLBACK_HOST:
        return AuthCallback(url=url)

    route = ROUTES.get(host or "")
    if route is None:
        logger.debug("Ignoring deep link with unknown route", extra={"url": url})
        return None

    ids = parse_qs(parts.query, keep_blank_values=True).get("id")
    item_id = _parse_uuid(ids[0] if ids else None)
    if item_id is None:
        logger.debug("Ignoring deep link without a valid id", extra={"url": url})
        return None

    return route(item_id)


class DeepLinkRouter:
    """
    Holds at most one pending deep link until the UI consumes it

    A newly handled link replaces any pending one; links that do not parse
    leave the pending link untouched.
    """

    def __init__(self):
        self.pending: Optional[DeepLink] = None
        self._listeners: List[Callable[[Optional[DeepLink]], None]] = []

    def subscribe(self, listener: Callable[[Optional[DeepLink]], None]) -> None:
        self._listeners.append(listener)

    def _set_pending(self, link: Optional[DeepLink]) -> None:
        self.pending = link
        for listener in list(self._listeners):
            listener(link)

    def handle(self, url: str) -> Optional[DeepLink]:
        link = parse(url)
        if link is not None:
            logger.info(
                "Deep link received", extra={"link_type": link.__class__.__name__}
            )
            self._set_pending(link)
        return link

    def consume(self) -> Optional[DeepLink]:
        """Return the pending link and clear it"""
        link = self.pending
        self._set_pending(None)
        return link

    def clear_pending_deep_link(self) -> None:
        self._set_pending(None)
