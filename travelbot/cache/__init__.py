"""Query cache and its storage backends."""

from .base import CacheEntry, CacheStore
from .memory import MemoryCacheStore
from .query_cache import QueryCache

__all__ = ["CacheEntry", "CacheStore", "MemoryCacheStore", "QueryCache"]
