"""Structured search for intents backed by database lookups."""

import logging

from travelbot.chat.models import Classification, Intent, ResultType
from travelbot.storage.base import (
    CooperationLookup,
    CooperationRecord,
    DestinationLookup,
    DestinationRecord,
)

logger = logging.getLogger(__name__)

STRUCTURED_INTENTS = {
    Intent.DESTINATION: ResultType.DESTINATION,
    Intent.RESTAURANT: ResultType.RESTAURANT,
    Intent.HOTEL: ResultType.HOTEL,
}


class StructuredSearchRouter:
    """Routes destination/restaurant/hotel intents to their lookups."""

    def __init__(
        self,
        destinations: DestinationLookup,
        cooperations: CooperationLookup,
        limit: int = 3,
    ):
        self.destinations = destinations
        self.cooperations = cooperations
        self.limit = limit

    @staticmethod
    def category_for(intent: Intent) -> ResultType | None:
        """Result category searched for ``intent``, or None if it has no structured path."""
        return STRUCTURED_INTENTS.get(intent)

    async def search(
        self,
        classification: Classification,
        message: str,
    ) -> list[DestinationRecord] | list[CooperationRecord]:
        """Run the structured search for a classified query.

        Args:
            classification: Classifier output
            message: Trimmed query, searched for when there are no keywords

        Returns:
            At most ``limit`` rows, most popular first; empty on a miss

        Raises:
            ValueError: If the intent has no structured path
        """
        category = self.category_for(classification.intent)
        if category is None:
            raise ValueError(f"No structured search for intent '{classification.intent.value}'")

        terms = classification.search_terms(message)

        if category is ResultType.DESTINATION:
            rows = await self.destinations.search(terms, self.limit)
        else:
            rows = await self.cooperations.search(category.value, terms, self.limit)

        logger.info(f"Found {len(rows)} {category.value} result(s) for {terms}")
        return rows[: self.limit]
