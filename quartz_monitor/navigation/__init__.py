from .deep_link import (
    AlertLink,
    AuthCallback,
    ClientLink,
    DeepLink,
    DeepLinkRouter,
    IncidentLink,
    ResourceLink,
    parse,
)

__all__ = [
    "AlertLink",
    "AuthCallback",
    "ClientLink",
    "DeepLink",
    "DeepLinkRouter",
    "IncidentLink",
    "ResourceLink",
    "parse",
]
