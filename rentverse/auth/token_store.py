"""Auth token storage.

The core never touches a process-wide token. Whatever builds the services
passes a ``TokenStore`` in; the app supplies one backed by secure storage and
tests use ``InMemoryTokenStore``.
"""

import logging
from typing import Protocol, runtime_checkable

from rentverse.config import settings

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenStore(Protocol):
    """Persists one bearer token under a fixed key."""

    async def get(self) -> str | None: ...

    async def set(self, token: str) -> None: ...

    async def remove(self) -> None:
        """Delete the token. Must be safe to call when nothing is stored."""
        ...


class InMemoryTokenStore:
    """Dict-backed store keyed by ``settings.token_key``."""

    def __init__(self, key: str | None = None, initial: str | None = None) -> None:
        self.key = key or settings.token_key
        self._data: dict[str, str] = {}
        if initial:
            self._data[self.key] = initial

    async def get(self) -> str | None:
        return self._data.get(self.key)

    async def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty token")
        self._data[self.key] = token

    async def remove(self) -> None:
        if self._data.pop(self.key, None) is not None:
            logger.debug("Removed stored token %r", self.key)
