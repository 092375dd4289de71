"""Cache store interface and entry model."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """A generated answer stored under the exact query text."""

    message: str
    response: str
    created_at: datetime = Field(default_factory=utcnow)


class CacheStore(ABC):
    """Insert-only key/value store for generated answers."""

    @abstractmethod
    async def get(self, message: str) -> CacheEntry | None:
        """Return the live entry stored under ``message``, if any."""
        pass

    @abstractmethod
    async def add(self, entry: CacheEntry) -> None:
        """Insert ``entry`` unless a live entry already exists for its message."""
        pass

    async def close(self) -> None:
        """Release any connections held by the store."""
