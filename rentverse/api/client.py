"""Async HTTP client for the core and AI services.

Wraps ``httpx.AsyncClient`` with the base URL, timeout and JSON headers for one
service, injects the stored bearer token on every request, and turns every
transport or HTTP failure into an ``ApiError``.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from rentverse.auth.token_store import TokenStore
from rentverse.config import Settings
from rentverse.errors import handle_api_error

logger = logging.getLogger(__name__)


class BearerTokenAuth(httpx.Auth):
    """Adds ``Authorization: Bearer <token>`` when the store holds a token."""

    def __init__(self, token_store: TokenStore) -> None:
        self.token_store = token_store

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        token = await self.token_store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def has_auth_header(request: httpx.Request) -> bool:
    return request.headers.get("Authorization", "").startswith("Bearer ")


class ApiClient:
    """One remote service: base URL, timeout, optional auth."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float,
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        name: str = "api",
    ) -> None:
        self.name = name
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            auth=BearerTokenAuth(token_store) if token_store is not None else None,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: For any failure, classified by ``handle_api_error``.
        """
        logger.debug("%s %s %s params=%s", self.name, method, path, params)
        try:
            response = await self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
            return response.json() if response.content else None
        except Exception as exc:
            error = handle_api_error(exc)
            logger.warning(
                "%s %s %s failed: status=%s code=%s message=%s",
                self.name, method, path, error.status, error.code, error.message,
            )
            raise error from exc

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def response_data(body: Any) -> Any:
    """Unwrap the ``{success, data}`` envelope the core service returns."""
    if isinstance(body, dict):
        return body.get("data")
    return None


def create_core_api(
    settings: Settings,
    token_store: TokenStore,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Mobile endpoints (``/api/v1/m``): auth, properties, favorites, bookings."""
    return ApiClient(
        settings.core_api_url,
        timeout=settings.core_api_timeout,
        token_store=token_store,
        transport=transport,
        name="core",
    )


def create_core_base_api(
    settings: Settings,
    token_store: TokenStore,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Non-mobile endpoints (``/api/v1``), e.g. listing create/update."""
    return ApiClient(
        settings.core_api_base_url,
        timeout=settings.core_api_timeout,
        token_store=token_store,
        transport=transport,
        name="core-base",
    )


def create_ai_api(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> ApiClient:
    """AI price-prediction service. No auth; predictions get a longer timeout."""
    return ApiClient(
        settings.ai_api_url,
        timeout=settings.ai_api_timeout,
        transport=transport,
        name="ai",
    )
