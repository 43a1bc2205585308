from typing import Dict, Any


class MonitorAPIError(Exception):
    """Base exception class for monitoring API errors"""

    def __init__(
        self,
        detail: str,
        error_code: str,
        status_code: int | None = None,
        additional_info: Dict[str, Any] | None = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code
        self.status_code = status_code
        self.additional_info = additional_info or {}


class UnauthorizedError(MonitorAPIError):
    """Raised when the API rejects the credentials"""

    def __init__(self, detail: str = "Please sign in to continue"):
        super().__init__(detail=detail, error_code="UNAUTHORIZED", status_code=401)


class ForbiddenError(MonitorAPIError):
    """Raised when the credentials lack permission for the action"""

    def __init__(self, detail: str = "You don't have permission for this action"):
        super().__init__(detail=detail, error_code="FORBIDDEN", status_code=403)


class NotFoundError(MonitorAPIError):
    """Raised when the requested entity does not exist"""

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            detail=f"{resource} not found",
            error_code="NOT_FOUND",
            status_code=404,
            additional_info={"resource": resource},
        )
        self.resource = resource


class ValidationError(MonitorAPIError):
    """Raised when the API refuses a request as invalid"""

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(
            detail=detail, error_code="VALIDATION_ERROR", status_code=status_code
        )


class RateLimitedError(MonitorAPIError):
    """Raised when the API throttles the client"""

    def __init__(self, retry_after: int | None = None):
        additional_info = {"retry_after": retry_after} if retry_after else {}
        super().__init__(
            detail="Too many requests. Please wait.",
            error_code="RATE_LIMITED",
            status_code=429,
            additional_info=additional_info,
        )


class ServerError(MonitorAPIError):
    """Raised on 5xx responses, unexpected statuses and unsuccessful envelopes"""

    def __init__(self, detail: str = "Server error", status_code: int | None = None):
        super().__init__(detail=detail, error_code="SERVER_ERROR", status_code=status_code)


class NetworkError(MonitorAPIError):
    """Raised when the request never produced a response"""

    def __init__(self, underlying: Exception | None = None, url: str | None = None):
        additional_info: Dict[str, Any] = {}
        if underlying is not None:
            additional_info["error_type"] = underlying.__class__.__name__
        if url:
            additional_info["url"] = url
        super().__init__(
            detail="Network error. Check your connection.",
            error_code="NETWORK_ERROR",
            additional_info=additional_info,
        )
        self.underlying = underlying


class DecodingError(MonitorAPIError):
    """Raised when a response body does not match the expected schema"""

    def __init__(self, underlying: Exception | None = None, path: str | None = None):
        additional_info = {"path": path} if path else {}
        super().__init__(
            detail="Error processing response",
            error_code="DECODING_ERROR",
            additional_info=additional_info,
        )
        self.underlying = underlying


class NoDataError(MonitorAPIError):
    """Raised when a successful envelope carries no data"""

    def __init__(self, path: str | None = None):
        additional_info = {"path": path} if path else {}
        super().__init__(
            detail="No data received",
            error_code="NO_DATA",
            additional_info=additional_info,
        )


class RequestCancelledError(MonitorAPIError):
    """Raised when the transport reports the request as cancelled"""

    def __init__(self, url: str | None = None):
        additional_info = {"url": url} if url else {}
        super().__init__(
            detail="Request cancelled",
            error_code="CANCELLED",
            additional_info=additional_info,
        )
