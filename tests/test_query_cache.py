"""Tests for the query cache and its stores."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from travelbot.cache import CacheEntry, MemoryCacheStore, QueryCache
from travelbot.cache.redis_store import RedisCacheStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class TestQueryCache:
    """Test exact-text lookup and store."""

    @pytest.mark.asyncio
    async def test_store_then_lookup(self):
        cache = QueryCache(MemoryCacheStore())

        await cache.store("  Đi Huế chơi gì?  ", "Đại Nội, chùa Thiên Mụ")

        assert await cache.lookup("Đi Huế chơi gì?") == "Đại Nội, chùa Thiên Mụ"

    @pytest.mark.asyncio
    async def test_lookup_is_case_and_punctuation_sensitive(self):
        cache = QueryCache(MemoryCacheStore())
        await cache.store("Đi Huế chơi gì?", "answer")

        assert await cache.lookup("đi huế chơi gì?") is None
        assert await cache.lookup("Đi Huế chơi gì") is None

    @pytest.mark.asyncio
    async def test_miss(self):
        assert await QueryCache(MemoryCacheStore()).lookup("anything") is None


class TestMemoryCacheStore:
    """Test the bounded TTL store."""

    @pytest.mark.asyncio
    async def test_existing_entry_not_overwritten(self):
        store = MemoryCacheStore()
        await store.add(CacheEntry(message="q", response="first"))
        await store.add(CacheEntry(message="q", response="second"))

        assert (await store.get("q")).response == "first"
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_entries_expire(self):
        clock = FakeClock()
        store = MemoryCacheStore(ttl_seconds=60, clock=clock)
        await store.add(CacheEntry(message="q", response="a", created_at=clock()))

        clock.advance(seconds=59)
        assert await store.get("q") is not None

        clock.advance(seconds=1)
        assert await store.get("q") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_expired_entry_can_be_replaced(self):
        clock = FakeClock()
        store = MemoryCacheStore(ttl_seconds=60, clock=clock)
        await store.add(CacheEntry(message="q", response="old", created_at=clock()))

        clock.advance(minutes=5)
        await store.add(CacheEntry(message="q", response="new", created_at=clock()))

        assert (await store.get("q")).response == "new"

    @pytest.mark.asyncio
    async def test_oldest_entry_evicted_when_full(self):
        store = MemoryCacheStore(max_entries=2)
        for message in ("a", "b", "c"):
            await store.add(CacheEntry(message=message, response=message.upper()))

        assert await store.get("a") is None
        assert (await store.get("b")).response == "B"
        assert (await store.get("c")).response == "C"


class TestRedisCacheStore:
    """Test the Redis store against a mocked client."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        return client

    @pytest.mark.asyncio
    async def test_add_uses_set_nx_with_expiry(self, client):
        store = RedisCacheStore(client, ttl_seconds=120)

        await store.add(CacheEntry(message="q", response="a"))

        args, kwargs = client.set.call_args
        assert args[0] == store.key_for("q")
        assert args[0].startswith("chat:cache:")
        assert kwargs == {"ex": 120, "nx": True}
        assert CacheEntry.model_validate_json(args[1]).response == "a"

    @pytest.mark.asyncio
    async def test_get_round_trip(self, client):
        store = RedisCacheStore(client)
        client.get.return_value = CacheEntry(message="q", response="a").model_dump_json()

        entry = await store.get("q")

        assert entry.response == "a"
        client.get.assert_awaited_once_with(store.key_for("q"))

    @pytest.mark.asyncio
    async def test_get_ignores_other_message(self, client):
        store = RedisCacheStore(client)
        client.get.return_value = CacheEntry(message="other", response="a").model_dump_json()

        assert await store.get("q") is None

    @pytest.mark.asyncio
    async def test_redis_failures_degrade(self, client):
        client.get.side_effect = RedisConnectionError("down")
        client.set.side_effect = RedisConnectionError("down")
        store = RedisCacheStore(client)

        assert await store.get("q") is None
        await store.add(CacheEntry(message="q", response="a"))

    @pytest.mark.asyncio
    async def test_malformed_entry_ignored(self, client):
        client.get.return_value = "not json"
        store = RedisCacheStore(client)

        assert await store.get("q") is None

    @pytest.mark.asyncio
    async def test_close_releases_client(self, client):
        client.aclose = AsyncMock()
        store = RedisCacheStore(client)

        await store.close()

        client.aclose.assert_awaited_once()
