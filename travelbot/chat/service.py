"""Chat turn orchestration."""

import logging
import time

from travelbot.cache.query_cache import QueryCache
from travelbot.chat.composer import ResponseComposer
from travelbot.chat.fallback import FallbackGenerator
from travelbot.chat.intent import IntentClassifier
from travelbot.chat.models import AIResponse, ChatQuery, ChatResponse
from travelbot.chat.search import StructuredSearchRouter
from travelbot.llm.gateway import ModelGateway

logger = logging.getLogger(__name__)


class ChatService:
    """Answers travel questions from the database or the generation backend.

    A turn checks the cache, classifies the query, runs the structured search
    for its intent (falling back to a generated answer when there is no
    structured path or no rows), composes the response and caches it when
    it was generated.
    """

    def __init__(
        self,
        cache: QueryCache,
        classifier: IntentClassifier,
        router: StructuredSearchRouter,
        composer: ResponseComposer,
        fallback: FallbackGenerator,
    ):
        self.cache = cache
        self.classifier = classifier
        self.router = router
        self.composer = composer
        self.fallback = fallback

    @classmethod
    def create(
        cls,
        gateway: ModelGateway,
        router: StructuredSearchRouter,
        cache: QueryCache,
    ) -> "ChatService":
        """Wire a service whose generating components share ``gateway``."""
        return cls(
            cache=cache,
            classifier=IntentClassifier(gateway),
            router=router,
            composer=ResponseComposer(gateway),
            fallback=FallbackGenerator(gateway),
        )

    async def handle_chat(self, message: str | None, lang: str | None = None) -> ChatResponse:
        """Process a complete chat turn.

        Args:
            message: Raw user message
            lang: Requested reply language tag ("vi" or "en")

        Returns:
            A ``database`` or ``ai`` response

        Raises:
            QueryValidationError: If the message is empty
            GatewayError: If a generation call fails
            ConfigurationError: If the generation backend is not configured
        """
        query = ChatQuery.from_raw(message, lang)
        start_time = time.time()

        cached = await self.cache.lookup(query.text)
        if cached is not None:
            return AIResponse(text=cached)

        response = await self._process(query)

        if isinstance(response, AIResponse):
            await self.cache.store(query.text, response.text)

        logger.info(
            f"Chat turn answered from {response.source} in {time.time() - start_time:.2f}s"
        )
        return response

    async def _process(self, query: ChatQuery) -> ChatResponse:
        classification = await self.classifier.classify(query.text)
        category = self.router.category_for(classification.intent)

        if category is None:
            return await self.fallback.generate(query.text, query.language, classification.intent)

        rows = await self.router.search(classification, query.text)
        if not rows:
            return await self.fallback.generate(
                query.text,
                query.language,
                classification.intent,
                database_miss=True,
            )

        return await self.composer.compose(category, rows, query.language)
