"""Composition root: builds the HTTP clients and services from settings."""

import logging

import httpx

from rentverse.api.client import create_ai_api, create_core_api, create_core_base_api
from rentverse.auth.token_store import InMemoryTokenStore, TokenStore
from rentverse.config import Settings
from rentverse.config import settings as default_settings
from rentverse.services.ai_service import AIService
from rentverse.services.auth_service import AuthService
from rentverse.services.booking_service import BookingService
from rentverse.services.property_service import PropertyService

logger = logging.getLogger(__name__)


class RentverseClient:
    """All remote services behind one object.

    Usage::

        async with RentverseClient(token_store=store) as client:
            await client.auth.login({"email": ..., "password": ...})
            bookings = await client.bookings.get_tenant_bookings()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.token_store = token_store if token_store is not None else InMemoryTokenStore(self.settings.token_key)

        self.core_api = create_core_api(self.settings, self.token_store, transport)
        self.core_base_api = create_core_base_api(self.settings, self.token_store, transport)
        self.ai_api = create_ai_api(self.settings, transport)

        self.auth = AuthService(self.core_api, self.token_store)
        self.properties = PropertyService(self.core_api, self.core_base_api)
        self.bookings = BookingService(self.core_api)
        self.ai = AIService(self.ai_api)
        logger.debug(
            "%s client ready (core=%s, ai=%s)",
            self.settings.app_name, self.settings.core_api_url, self.settings.ai_api_url,
        )

    async def aclose(self) -> None:
        for api in (self.core_api, self.core_base_api, self.ai_api):
            await api.aclose()

    async def __aenter__(self) -> "RentverseClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
