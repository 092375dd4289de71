"""In-memory lookups with the same matching rules as the SQL ones."""

from collections.abc import Iterable

from travelbot.storage.base import (
    CooperationLookup,
    CooperationRecord,
    DestinationLookup,
    DestinationRecord,
)


def _matches(fields: Iterable[str | None], terms: list[str]) -> bool:
    if not terms:
        return True
    haystacks = [(field or "").casefold() for field in fields]
    return any(term.casefold() in haystack for term in terms for haystack in haystacks)


class InMemoryDestinationLookup(DestinationLookup):
    """Destination lookup over a list of records."""

    def __init__(self, records: Iterable[DestinationRecord] = ()):
        self.records = list(records)

    async def search(self, terms: list[str], limit: int) -> list[DestinationRecord]:
        matches = [
            record
            for record in self.records
            if _matches(
                (record.name, record.province, record.description_vi, record.description_en),
                terms,
            )
        ]
        matches.sort(key=lambda record: record.favourite_times, reverse=True)
        return matches[:limit]


class InMemoryCooperationLookup(CooperationLookup):
    """Cooperation lookup over a list of records."""

    def __init__(self, records: Iterable[CooperationRecord] = ()):
        self.records = list(records)

    async def search(self, category: str, terms: list[str], limit: int) -> list[CooperationRecord]:
        matches = [
            record
            for record in self.records
            if record.active
            and record.type == category
            and _matches((record.name, record.city, record.province, record.introduction), terms)
        ]
        matches.sort(key=lambda record: record.booking_times, reverse=True)
        return matches[:limit]
