"""Main entry point for the travel chat service."""

import asyncio
import logging
import sys
from functools import partial

from dotenv import load_dotenv

from travelbot.cache import MemoryCacheStore, QueryCache
from travelbot.cache.base import CacheStore
from travelbot.chat import ChatService
from travelbot.chat.search import StructuredSearchRouter
from travelbot.config import CacheBackend, Settings, get_settings
from travelbot.llm import ModelGateway, create_llm_provider
from travelbot.storage.sql import SqlCooperationLookup, SqlDestinationLookup, create_session_factory
from travelbot.web_server import WebServer

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings) -> CacheStore:
    """Build the configured cache backend."""
    if settings.cache_backend == CacheBackend.REDIS:
        from travelbot.cache.redis_store import RedisCacheStore

        return RedisCacheStore.from_url(settings.redis_url, ttl_seconds=settings.cache_ttl_seconds)

    return MemoryCacheStore(
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
    )


def build_chat_service(settings: Settings, session_factory, cache_store: CacheStore) -> ChatService:
    """Wire the chat service from settings, a database session factory and a cache store."""
    gateway = ModelGateway(
        provider_factory=partial(create_llm_provider, settings=settings),
        max_attempts=settings.llm_max_attempts,
        retry_delay=settings.llm_retry_delay,
    )
    router = StructuredSearchRouter(
        SqlDestinationLookup(session_factory),
        SqlCooperationLookup(session_factory),
        limit=settings.search_result_limit,
    )
    cache = QueryCache(cache_store)
    return ChatService.create(gateway=gateway, router=router, cache=cache)


async def main(stop_event: asyncio.Event | None = None) -> None:
    """Main application entry point.

    Args:
        stop_event: Event that ends serving when set (defaults to running until cancelled)
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting travel chat service in {settings.environment.value} mode")
    logger.info(f"Using LLM provider: {settings.llm_provider.value}")

    # Validate configuration
    try:
        settings.validate_provider_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    engine, session_factory = create_session_factory(settings.database_url)
    cache_store = create_cache_store(settings)
    chat_service = build_chat_service(settings, session_factory, cache_store)

    web_server = WebServer(chat_service, host=settings.host, port=settings.port)
    web_runner = await web_server.start()

    try:
        await (stop_event or asyncio.Event()).wait()
    finally:
        logger.info("Shutting down...")
        await web_server.stop(web_runner)
        await engine.dispose()
        await cache_store.close()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
