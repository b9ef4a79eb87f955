"""Auth service — login, registration and session state against the core service."""

import logging
from typing import Any

from rentverse.api.client import ApiClient, response_data
from rentverse.auth.token_store import TokenStore
from rentverse.errors import ApiError
from rentverse.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, User
from rentverse.validators import parse_login_request, parse_register_request

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, api: ApiClient, token_store: TokenStore) -> None:
        self.api = api
        self.token_store = token_store

    async def _store_token(self, response: AuthResponse) -> AuthResponse:
        if response.data is not None and response.data.token:
            await self.token_store.set(response.data.token)
        return response

    async def login(self, credentials: LoginRequest | dict[str, Any]) -> AuthResponse:
        """Validate, then log in and store the returned token.

        Raises:
            ValidationFailedError: Invalid credentials shape; no request is sent.
            ApiError: The core service rejected the request.
        """
        request = parse_login_request(credentials)
        body = await self.api.post("/auth/login", json=request.to_wire())
        response = AuthResponse.model_validate(body)
        if response.data is not None:
            logger.info("User %s logged in", response.data.user.id)
        return await self._store_token(response)

    async def register(self, user_data: RegisterRequest | dict[str, Any]) -> AuthResponse:
        request = parse_register_request(user_data)
        body = await self.api.post("/auth/register", json=request.to_wire())
        response = AuthResponse.model_validate(body)
        if response.data is not None:
            logger.info("Registered user %s", response.data.user.id)
        return await self._store_token(response)

    async def logout(self) -> None:
        """Drop the stored token. Safe to call when already logged out."""
        await self.token_store.remove()
        logger.info("Logged out")

    async def refresh_token(self) -> AuthResponse:
        body = await self.api.post("/auth/refresh")
        return await self._store_token(AuthResponse.model_validate(body))

    async def get_current_user(self) -> User | None:
        """The authenticated user, or None without a token or when the lookup fails."""
        if not await self.token_store.get():
            return None
        try:
            body = await self.api.get("/auth/me")
        except ApiError as exc:
            logger.info("Could not load current user: %s", exc)
            return None
        data = response_data(body)
        return User.model_validate(data) if data else None

    async def is_authenticated(self) -> bool:
        return bool(await self.token_store.get())

    async def update_profile(self, data: dict[str, Any]) -> User:
        body = await self.api.put("/users/profile", json=data)
        return User.model_validate(response_data(body))
