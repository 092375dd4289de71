"""Exact-text cache of generated answers."""

import logging

from travelbot.cache.base import CacheEntry, CacheStore

logger = logging.getLogger(__name__)


class QueryCache:
    """Looks up and stores generated answers by the trimmed query text.

    Keys are compared exactly: case and punctuation are significant. Lookup
    and store are not atomic, so concurrent identical misses may both store.
    """

    def __init__(self, backend: CacheStore):
        self.backend = backend

    async def lookup(self, query: str) -> str | None:
        entry = await self.backend.get(query.strip())
        if entry is None:
            return None
        logger.info(f"Cache hit for query: {entry.message}")
        return entry.response

    async def store(self, query: str, text: str) -> None:
        await self.backend.add(CacheEntry(message=query.strip(), response=text))
