from .exceptions import (
    MonitorAPIError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    RateLimitedError,
    ServerError,
    NetworkError,
    DecodingError,
    NoDataError,
    RequestCancelledError,
)
from .logging import setup_logging

__all__ = [
    "MonitorAPIError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
    "RateLimitedError",
    "ServerError",
    "NetworkError",
    "DecodingError",
    "NoDataError",
    "RequestCancelledError",
    "setup_logging",
]
