from functools import lru_cache
from typing import Any, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from quartz_monitor.clients.endpoints import Endpoint
from quartz_monitor.core.config import settings
from quartz_monitor.core.exceptions import (
    DecodingError,
    ForbiddenError,
    NetworkError,
    NoDataError,
    NotFoundError,
    RateLimitedError,
    RequestCancelledError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from quartz_monitor.core.logging import LogContext, correlation
from quartz_monitor.models.envelope import APIResponse
from quartz_monitor.models.pagination import PaginationMeta
from quartz_monitor.utils.request_id import REQUEST_ID_HEADER, generate_request_id

logger = LogContext(__name__)

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


class APIClient:
    """
    Async client for the monitoring REST API

    Every response is wrapped in an envelope of the form
    ``{"success": bool, "data": ..., "error": {...}, "meta": {...}}``;
    the request variants differ only in how they treat a missing or
    mismatching ``data`` payload.
    """

    def __init__(
        self,
        base_url: str | None = None,
        credentials=None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.credentials = credentials
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT
        )

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    def _url(self, endpoint: Endpoint) -> str:
        return f"{self.base_url}{endpoint.path}"

    def _headers(self, request_id: str) -> dict:
        headers = {
            "Content-Type": "application/json",
            REQUEST_ID_HEADER: request_id,
        }
        auth_headers = self.credentials.auth_headers() if self.credentials else {}
        if not auth_headers:
            logger.warning("No API credentials available")
        headers.update(auth_headers)
        return headers

    async def _send(self, endpoint: Endpoint) -> httpx.Response:
        url = self._url(endpoint)
        request_id = generate_request_id()

        with correlation(request_id=request_id):
            logger.debug("API request", extra={"method": endpoint.method, "url": url})

            try:
                response = await self._client.request(
                    endpoint.method,
                    url,
                    params=endpoint.params or None,
                    json=endpoint.json,
                    headers=self._headers(request_id),
                )
            except httpx.TransportError as e:
                logger.warning(
                    "API request failed",
                    extra={
                        "url": url,
                        "error": str(e),
                        "error_type": e.__class__.__name__,
                    },
                )
                raise NetworkError(underlying=e, url=url) from e
            except RuntimeError as e:
                # httpx refuses to send once the client has been closed
                if self._client.is_closed:
                    logger.debug("API request cancelled", extra={"url": url})
                    raise RequestCancelledError(url=url) from e
                raise

            logger.debug(
                "API response", extra={"url": url, "status_code": response.status_code}
            )
        self._raise_for_status(response)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        if status == 401:
            raise UnauthorizedError()
        if status == 403:
            raise ForbiddenError()
        if status == 404:
            raise NotFoundError("Resource")
        if status in (400, 422):
            raise ValidationError(APIClient._error_message(response), status_code=status)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitedError(
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )
        if 500 <= status < 600:
            raise ServerError("Server error", status_code=status)
        raise ServerError(f"Unknown error: {status}", status_code=status)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            envelope = APIResponse.model_validate_json(response.content)
        except PydanticValidationError:
            return "Invalid request"
        return envelope.error.message if envelope.error else "Invalid request"

    @staticmethod
    def _envelope(response: httpx.Response, endpoint: Endpoint) -> APIResponse:
        try:
            envelope = APIResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise DecodingError(underlying=e, path=endpoint.path) from e

        if not envelope.success:
            message = envelope.error.message if envelope.error else "Unknown error"
            raise ServerError(message, status_code=response.status_code)
        return envelope

    @staticmethod
    def _decode(data: Any, model: Any, endpoint: Endpoint) -> Any:
        if data is None:
            raise NoDataError(path=endpoint.path)
        try:
            return _adapter(model).validate_python(data)
        except PydanticValidationError as e:
            logger.debug(
                "Response did not match schema",
                extra={
                    "path": endpoint.path,
                    "model": getattr(model, "__name__", str(model)),
                    "error_count": e.error_count(),
                },
            )
            raise DecodingError(underlying=e, path=endpoint.path) from e

    async def request(self, endpoint: Endpoint, model: Type[T] | Any) -> T:
        """Decode-required request; raises on null data or schema mismatch"""
        response = await self._send(endpoint)
        envelope = self._envelope(response, endpoint)
        return self._decode(envelope.data, model, endpoint)

    async def request_optional(self, endpoint: Endpoint, model: Type[T] | Any) -> Optional[T]:
        """Like ``request`` but null data or a schema mismatch yields None"""
        try:
            return await self.request(endpoint, model)
        except (NoDataError, DecodingError):
            return None

    async def request_array_or_empty(
        self, endpoint: Endpoint, model: Type[T]
    ) -> List[T]:
        """List request where null data or a schema mismatch yields an empty list"""
        try:
            return await self.request(endpoint, List[model])
        except (NoDataError, DecodingError):
            return []

    async def request_void(self, endpoint: Endpoint) -> None:
        await self._send(endpoint)

    async def request_with_meta(
        self, endpoint: Endpoint, model: Type[T] | Any
    ) -> Tuple[T, Optional[PaginationMeta]]:
        """Request returning the decoded data together with its pagination meta"""
        response = await self._send(endpoint)
        envelope = self._envelope(response, endpoint)
        data = self._decode(envelope.data, model, endpoint)

        meta = None
        if envelope.meta is not None:
            try:
                meta = PaginationMeta.model_validate(envelope.meta)
            except PydanticValidationError:
                logger.debug(
                    "Ignoring unrecognised pagination meta",
                    extra={"path": endpoint.path},
                )
        return data, meta

    async def request_single_or_matching(
        self,
        endpoint: Endpoint,
        model: Type[T],
        item_id: UUID,
        resource: str = "Resource",
    ) -> T:
        """
        Fetch one entity from an endpoint that answers with either the object
        itself or a list of objects

        The single-object shape is tried first. For a list, the element whose
        ``id`` equals ``item_id`` is returned, falling back to the first one.

        Raises:
            NotFoundError: If the endpoint answers with an empty list
        """
        response = await self._send(endpoint)
        envelope = self._envelope(response, endpoint)
        if envelope.data is None:
            raise NoDataError(path=endpoint.path)

        try:
            return _adapter(model).validate_python(envelope.data)
        except PydanticValidationError:
            pass

        items = self._decode(envelope.data, List[model], endpoint)
        if not items:
            raise NotFoundError(resource)
        for item in items:
            if getattr(item, "id", None) == item_id:
                return item
        return items[0]
