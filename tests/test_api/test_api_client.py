"""Tests for the HTTP client: base URLs, auth header injection, error translation."""

import httpx
import pytest
from conftest import CORE, TEST_SETTINGS, FakeBackend

from rentverse.api.client import (
    ApiClient,
    create_ai_api,
    create_core_api,
    create_core_base_api,
    has_auth_header,
    response_data,
)
from rentverse.auth.token_store import InMemoryTokenStore
from rentverse.errors import NETWORK_ERROR, UNKNOWN_ERROR, ApiError


@pytest.mark.asyncio
class TestFactories:
    async def test_base_urls(self):
        store = InMemoryTokenStore()
        core = create_core_api(TEST_SETTINGS, store)
        base = create_core_base_api(TEST_SETTINGS, store)
        ai = create_ai_api(TEST_SETTINGS)
        try:
            assert core.base_url.rstrip("/") == "https://core.rentverse.test/api/v1/m"
            assert base.base_url.rstrip("/") == "https://core.rentverse.test/api/v1"
            assert ai.base_url.rstrip("/") == "https://ai.rentverse.test"
        finally:
            for api in (core, base, ai):
                await api.aclose()


@pytest.mark.asyncio
class TestAuthHeader:
    async def test_token_is_injected(self, backend: FakeBackend):
        backend.add("GET", f"{CORE}/ping", {"ok": True})
        store = InMemoryTokenStore(initial="jwt-xyz")
        async with create_core_api(TEST_SETTINGS, store, backend.transport) as api:
            assert await api.get("/ping") == {"ok": True}
        assert has_auth_header(backend.last_request)
        assert backend.last_request.headers["Authorization"] == "Bearer jwt-xyz"

    async def test_no_token_no_header(self, backend: FakeBackend):
        backend.add("GET", f"{CORE}/ping", {"ok": True})
        async with create_core_api(TEST_SETTINGS, InMemoryTokenStore(), backend.transport) as api:
            await api.get("/ping")
        assert not has_auth_header(backend.last_request)

    async def test_token_is_read_per_request(self, backend: FakeBackend):
        backend.add("GET", f"{CORE}/ping", {"ok": True})
        store = InMemoryTokenStore()
        async with create_core_api(TEST_SETTINGS, store, backend.transport) as api:
            await api.get("/ping")
            await store.set("late-token")
            await api.get("/ping")
        assert [has_auth_header(r) for r in backend.requests] == [False, True]

    async def test_json_headers(self, backend: FakeBackend):
        backend.add("POST", f"{CORE}/echo", {})
        async with create_core_api(TEST_SETTINGS, InMemoryTokenStore(), backend.transport) as api:
            await api.post("/echo", json={"a": 1})
        assert backend.last_request.headers["Content-Type"] == "application/json"
        assert backend.last_json() == {"a": 1}


@pytest.mark.asyncio
class TestErrorTranslation:
    async def _call(self, handler) -> ApiError:
        api = ApiClient("https://core.rentverse.test", timeout=1, transport=httpx.MockTransport(handler))
        async with api:
            with pytest.raises(ApiError) as exc_info:
                await api.get("/anything")
        return exc_info.value

    async def test_status_with_server_message(self):
        error = await self._call(lambda r: httpx.Response(404, json={"message": "Property not found"}))
        assert (error.status, error.message) == (404, "Property not found")

    @pytest.mark.parametrize(
        "status, message",
        [
            (401, "Authentication failed. Please login again."),
            (403, "You do not have permission to perform this action."),
            (500, "Server error. Please try again later."),
            (503, "Service unavailable. Please try again later."),
            (418, "An error occurred. Please try again."),
        ],
    )
    async def test_default_message_per_status(self, status, message):
        error = await self._call(lambda r: httpx.Response(status, text="<html>oops</html>"))
        assert error.status == status
        assert error.message == message

    async def test_no_response_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        error = await self._call(handler)
        assert error.status == 0
        assert error.code == NETWORK_ERROR
        assert error.message

    async def test_unexpected_failure_is_unknown_error(self):
        error = await self._call(lambda r: httpx.Response(200, content=b"not json"))
        assert error.status == -1
        assert error.code == UNKNOWN_ERROR
        assert error.message == "An unexpected error occurred"

    async def test_original_exception_is_chained(self):
        error = await self._call(lambda r: httpx.Response(500))
        assert isinstance(error.__cause__, httpx.HTTPStatusError)


class TestResponseData:
    def test_unwraps_envelope(self):
        assert response_data({"success": True, "data": [1]}) == [1]

    def test_non_dict(self):
        assert response_data(None) is None
        assert response_data([1, 2]) is None
