"""Bounded in-process cache store."""

import logging
from collections import OrderedDict
from collections.abc import Callable
from datetime import datetime, timedelta

from travelbot.cache.base import CacheEntry, CacheStore, utcnow

logger = logging.getLogger(__name__)


class MemoryCacheStore(CacheStore):
    """Cache store holding at most ``max_entries`` entries for ``ttl_seconds``.

    Entries are kept in insertion order; when the bound is reached the oldest
    entry is evicted. Expired entries are dropped when they are looked up.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        ttl_seconds: int = 7 * 24 * 3600,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.max_entries = max_entries
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at >= self.ttl

    async def get(self, message: str) -> CacheEntry | None:
        entry = self._entries.get(message)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[message]
            return None
        return entry

    async def add(self, entry: CacheEntry) -> None:
        if await self.get(entry.message) is not None:
            return

        self._entries[entry.message] = entry
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cached answer for: {evicted}")
