"""Tests for the in-memory token store."""

import pytest

from rentverse.auth.token_store import InMemoryTokenStore, TokenStore

pytestmark = pytest.mark.asyncio


class TestInMemoryTokenStore:
    async def test_satisfies_protocol(self):
        assert isinstance(InMemoryTokenStore(), TokenStore)

    async def test_default_key(self):
        assert InMemoryTokenStore().key == "auth_token"

    async def test_set_get_remove(self):
        store = InMemoryTokenStore()
        assert await store.get() is None
        await store.set("jwt-1")
        assert await store.get() == "jwt-1"
        await store.remove()
        assert await store.get() is None

    async def test_remove_is_idempotent(self):
        store = InMemoryTokenStore(initial="jwt-1")
        await store.remove()
        await store.remove()
        assert await store.get() is None

    async def test_set_replaces(self):
        store = InMemoryTokenStore(initial="old")
        await store.set("new")
        assert await store.get() == "new"

    async def test_empty_token_is_rejected(self):
        store = InMemoryTokenStore(initial="keep")
        with pytest.raises(ValueError):
            await store.set("")
        assert await store.get() == "keep"

    async def test_stores_are_independent(self):
        first, second = InMemoryTokenStore(), InMemoryTokenStore()
        await first.set("a")
        assert await second.get() is None
