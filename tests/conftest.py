"""Shared test configuration and fixtures.

Remote services are replaced by ``FakeBackend``, an ``httpx.MockTransport``
handler that serves canned JSON per ``(method, path)`` and records every
request it receives. Nothing leaves the process.
"""

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from rentverse.auth.token_store import InMemoryTokenStore
from rentverse.client import RentverseClient
from rentverse.config import Settings
from rentverse.schemas.booking import Booking
from rentverse.schemas.property import Property

CORE = "/api/v1/m"
CORE_BASE = "/api/v1"

TEST_SETTINGS = Settings(
    core_api_host="core.rentverse.test",
    ai_api_host="ai.rentverse.test",
    log_level="DEBUG",
)


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


def make_booking(**overrides: Any) -> Booking:
    """Build a PENDING booking; keyword overrides use snake_case field names."""
    data: dict[str, Any] = {
        "id": "booking-1",
        "property_id": "property-1",
        "tenant_id": "tenant-1",
        "landlord_id": "owner-1",
        "start_date": "2026-01-01T00:00:00.000Z",
        "end_date": "2026-07-01T00:00:00.000Z",
        "rent_amount": "1500.00",
        "currency_code": "MYR",
        "status": "PENDING",
        "notes": None,
        "created_at": "2025-12-01T08:00:00.000Z",
        "updated_at": "2025-12-01T08:00:00.000Z",
    }
    data.update(overrides)
    return Booking.model_validate(data)


def make_property(**overrides: Any) -> Property:
    """Build an approved Condominium listing in Kuala Lumpur."""
    data: dict[str, Any] = {
        "id": "property-1",
        "title": "Cozy Condo near KLCC",
        "address": "12 Jalan Ampang",
        "city": "Kuala Lumpur",
        "state": "Wilayah Persekutuan",
        "zip_code": "50450",
        "price": "2500.00",
        "bedrooms": 2,
        "bathrooms": 2,
        "area_sqm": 85.0,
        "furnished": "Fully Furnished",
        "status": "APPROVED",
        "owner_id": "owner-1",
        "property_type_id": "pt-condo",
        "property_type": {"id": "pt-condo", "code": "CONDO", "name": "Condominium"},
    }
    data.update(overrides)
    return Property.model_validate(data)


def wire(record: Booking | Property) -> dict[str, Any]:
    """JSON the core service would send for ``record`` (camelCase keys)."""
    return record.model_dump(mode="json", by_alias=True)


def envelope(data: Any, success: bool = True) -> dict[str, Any]:
    return {"success": success, "data": data}


# ---------------------------------------------------------------------------
# Fake remote services
# ---------------------------------------------------------------------------


class FakeBackend:
    """Canned responses keyed by ``(method, path)``; unknown routes answer 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=json_body)

    def fail(self, method: str, path: str, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc_type("connection refused", request=request)

        self.routes[(method, path)] = raise_error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Route not found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        content = self.last_request.content
        return json.loads(content) if content else None


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest_asyncio.fixture
async def client(backend: FakeBackend, token_store: InMemoryTokenStore) -> AsyncGenerator[RentverseClient, None]:
    """RentverseClient wired to the fake backend."""
    async with RentverseClient(
        settings=TEST_SETTINGS, token_store=token_store, transport=backend.transport
    ) as rentverse:
        yield rentverse
