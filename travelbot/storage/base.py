"""Lookup interfaces for destination and cooperation data."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class DestinationRecord:
    """A tourist destination row."""

    name: str
    province: str | None = None
    specific_address: str | None = None
    description_vi: str | None = None
    description_en: str | None = None
    favourite_times: int = 0
    id: int | None = None


@dataclass
class CooperationRecord:
    """A partner business row (restaurant, hotel, ...)."""

    name: str
    type: str
    address: str | None = None
    district: str | None = None
    city: str | None = None
    province: str | None = None
    introduction: str | None = None
    extension: str | None = None
    booking_times: int = 0
    active: bool = True
    id: int | None = None


class DestinationLookup(ABC):
    """Keyword search over destinations."""

    @abstractmethod
    async def search(self, terms: list[str], limit: int) -> list[DestinationRecord]:
        """Find destinations matching any term.

        Each term is matched case-insensitively as a substring of the name,
        province or either description. Results are ordered by
        ``favourite_times`` descending.

        Args:
            terms: Search terms, OR-combined
            limit: Maximum number of rows

        Returns:
            Matching destinations
        """
        pass


class CooperationLookup(ABC):
    """Keyword search over active cooperations of one category."""

    @abstractmethod
    async def search(self, category: str, terms: list[str], limit: int) -> list[CooperationRecord]:
        """Find active cooperations of ``category`` matching any term.

        Each term is matched case-insensitively as a substring of the name,
        city, province or introduction. Results are ordered by
        ``booking_times`` descending.

        Args:
            category: Cooperation type, e.g. "restaurant" or "hotel"
            terms: Search terms, OR-combined
            limit: Maximum number of rows

        Returns:
            Matching cooperations
        """
        pass
