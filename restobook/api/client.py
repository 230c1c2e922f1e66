"""Authenticated HTTP client for the reservation REST API."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from restobook.config import Config
from restobook.exceptions import (
    AuthenticationError,
    MalformedResponseError,
    TransportError,
    error_for_status,
)
from restobook.session import RefreshErr, Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiClient:
    """Issues REST calls with bearer authentication and one silent refresh.

    Every request carries ``Authorization: Bearer <access>`` when the session
    holds a token. A 401 triggers exactly one refresh followed by one replay
    of the request; a second 401, or a failed refresh, tears the session down,
    fires ``on_auth_expired`` and raises AuthenticationError.
    """

    def __init__(
        self,
        config: Config,
        session: Session,
        transport: httpx.AsyncBaseTransport | None = None,
        on_auth_expired: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Application configuration (base URL and timeout)
            session: Token holder shared with the auth store
            transport: Optional transport override (tests, ASGI apps)
            on_auth_expired: Called when authentication is irrecoverably lost
        """
        self.config = config
        self.session = session
        self.on_auth_expired = on_auth_expired
        self._http = httpx.AsyncClient(
            base_url=config.api_url.rstrip("/"),
            timeout=config.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        auth: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            params: Query parameters; None values are dropped
            json: JSON body
            files: Multipart files (switches the body to multipart)
            data: Multipart form fields
            auth: Whether to attach the bearer token and refresh on 401

        Returns:
            Decoded JSON, or None for empty responses

        Raises:
            ApiError: Non-2xx response (subclass by status code)
            TransportError: Timeout or connection failure
        """
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        response = await self._send(method, path, params, json, files, data, auth)

        # Anonymous 401s fall through to the generic mapping below
        if response.status_code == 401 and auth and self.session.is_authenticated:
            logger.debug(f"{method} {path} returned 401, refreshing token")
            result = await self.session.refresh(self._http)
            if isinstance(result, RefreshErr):
                self._expire(f"refresh failed: {result.reason}")
                raise AuthenticationError(401, _decode(response))

            response = await self._send(method, path, params, json, files, data, auth)
            if response.status_code == 401:
                self.session.clear()
                self._expire("request still unauthorized after refresh")
                raise AuthenticationError(401, _decode(response))

        if response.is_error:
            payload = _decode(response)
            logger.debug(f"{method} {path} failed with {response.status_code}: {payload}")
            raise error_for_status(response.status_code, payload)

        return _decode(response)

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def _send(self, method, path, params, json, files, data, auth) -> httpx.Response:
        headers = {}
        if auth and self.session.access:
            headers["Authorization"] = f"Bearer {self.session.access}"

        logger.debug(f"{method} {path} params={params}")
        try:
            return await self._http.request(
                method,
                path,
                params=params,
                json=json,
                files=files,
                data=data,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out")
            raise TransportError(f"Request timed out: {method} {path}") from e
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} transport error: {e}")
            raise TransportError(f"Cannot reach server: {e}") from e

    def _expire(self, reason: str) -> None:
        logger.info(f"Authentication expired ({reason})")
        if self.on_auth_expired is not None:
            self.on_auth_expired()


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def parse(schema: type[T], data: Any) -> T:
    """Validate a decoded response body against ``schema``.

    Raises:
        MalformedResponseError: The body does not match the schema
    """
    try:
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as e:
        logger.warning(f"Unexpected response body for {schema}: {e.error_count()} errors")
        raise MalformedResponseError(f"Unexpected response from server: {e}") from e
