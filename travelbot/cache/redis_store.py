"""Redis-backed cache store."""

import hashlib
import logging

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from travelbot.cache.base import CacheEntry, CacheStore

logger = logging.getLogger(__name__)


class RedisCacheStore(CacheStore):
    """Cache store keeping each answer in Redis with an expiry.

    Keys are ``<prefix><sha256 of the query>``; writes use ``SET NX`` so an
    existing answer is never overwritten. Redis failures are logged and
    treated as a miss or a skipped write.
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl_seconds: int = 7 * 24 * 3600,
        key_prefix: str = "chat:cache:",
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisCacheStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def key_for(self, message: str) -> str:
        digest = hashlib.sha256(message.encode("utf-8")).hexdigest()
        return f"{self.key_prefix}{digest}"

    async def get(self, message: str) -> CacheEntry | None:
        try:
            raw = await self.client.get(self.key_for(message))
        except RedisError as e:
            logger.warning(f"Redis cache lookup failed: {e}")
            return None

        if raw is None:
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed cache entry: {e}")
            return None

        # Guard against hash collisions
        return entry if entry.message == message else None

    async def add(self, entry: CacheEntry) -> None:
        try:
            await self.client.set(
                self.key_for(entry.message),
                entry.model_dump_json(),
                ex=self.ttl_seconds,
                nx=True,
            )
        except RedisError as e:
            logger.warning(f"Redis cache write failed: {e}")

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis cache connection closed")
