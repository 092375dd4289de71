"""Model gateway: error classification, bounded retries and text extraction."""

import asyncio
import logging
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from travelbot.errors import GenerationError, RateLimitError, ServiceUnavailableError
from travelbot.llm.base import LLMProvider

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = {429}
UNAVAILABLE_STATUSES = {500, 503}

_RATE_LIMIT_PATTERN = re.compile(
    r"quota|rate[\s_-]?limit|\brate\b|resource[\s_]?exhausted|too many requests",
    re.IGNORECASE,
)
_UNAVAILABLE_PATTERN = re.compile(r"unavailable|internal|backend error", re.IGNORECASE)


class ErrorKind(str, Enum):
    """Classification of a backend failure."""

    RATE_LIMIT = "rate_limit"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


def _status_of(error: object) -> int | None:
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        # grpc errors expose code() as a method and some SDKs use enum names
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _texts_of(error: object) -> list[str]:
    texts = []
    message = getattr(error, "message", None)
    if isinstance(message, str):
        texts.append(message)
    texts.append(str(error))
    for attr in ("status", "status_text", "reason"):
        value = getattr(error, attr, None)
        if isinstance(value, str):
            texts.append(value)
    return texts


def _cause_message(error: object) -> str:
    cause = getattr(error, "__cause__", None) or getattr(error, "cause", None)
    if cause is None or cause is error:
        return ""
    message = getattr(cause, "message", None)
    if isinstance(message, str):
        return message
    return str(cause) if isinstance(cause, BaseException) else ""


def classify_error(error: object) -> ErrorKind:
    """Classify an error of unknown shape raised by a generation backend.

    Looks at whichever of status code, message text and nested cause message
    are present. Rate limiting wins over unavailability.
    """
    status = _status_of(error)
    texts = _texts_of(error)
    cause = _cause_message(error)

    if (
        status in RATE_LIMIT_STATUSES
        or any(_RATE_LIMIT_PATTERN.search(text) for text in texts)
        or (cause and _RATE_LIMIT_PATTERN.search(cause))
    ):
        return ErrorKind.RATE_LIMIT

    if status in UNAVAILABLE_STATUSES or any(_UNAVAILABLE_PATTERN.search(text) for text in texts):
        return ErrorKind.UNAVAILABLE

    return ErrorKind.UNKNOWN


def extract_text(result: Any) -> str:
    """Pull plain text out of a generation result.

    Prefers the top-level ``text`` accessor, then the first non-empty part of
    any candidate, then the first non-empty chat choice. Returns an empty
    string when nothing usable is found.
    """
    if result is None:
        return ""

    try:
        text = getattr(result, "text", None)
    except (ValueError, AttributeError, IndexError):
        # Gemini's accessor raises when the response has no valid parts
        text = None
    if isinstance(text, str) and text.strip():
        return text.strip()

    for candidate in getattr(result, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            part_text = getattr(part, "text", None)
            if isinstance(part_text, str) and part_text.strip():
                return part_text.strip()

    for choice in getattr(result, "choices", None) or []:
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None)
        if isinstance(content, str) and content.strip():
            return content.strip()

    return ""


class ModelGateway:
    """Runs prompts against a generation provider with a bounded retry policy.

    The provider is either injected or built once, on first use, by
    ``provider_factory``. A factory failure (e.g. a missing API key) is raised
    on every call without contacting the backend.
    """

    def __init__(
        self,
        provider: LLMProvider | None = None,
        provider_factory: Callable[[], LLMProvider] | None = None,
        max_attempts: int = 2,
        retry_delay: float = 2.0,
    ) -> None:
        if provider is None and provider_factory is None:
            raise ValueError("Either provider or provider_factory is required")
        self._provider = provider
        self._provider_factory = provider_factory
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = self._provider_factory()
            logger.info(f"Generation provider initialized: {type(self._provider).__name__}")
        return self._provider

    async def generate(self, prompt: str, system_instruction: str | None = None) -> Any:
        """Run a generation call and return the raw backend result.

        Raises:
            ConfigurationError: The provider cannot be built
            RateLimitError: Still rate limited after ``max_attempts`` attempts
            ServiceUnavailableError: The backend is unavailable (not retried)
            GenerationError: Any other backend failure (not retried)
        """
        provider = self.provider
        attempts_left = self.max_attempts

        while True:
            try:
                return await provider.generate_content(prompt, system_instruction=system_instruction)
            except Exception as e:
                kind = classify_error(e)

                if kind is ErrorKind.RATE_LIMIT:
                    attempts_left -= 1
                    if attempts_left <= 0:
                        logger.error(f"Generation rate limited, giving up: {e}")
                        raise RateLimitError(
                            "Generation quota exceeded. Please try again shortly."
                        ) from e
                    logger.warning(
                        f"Generation rate limited, retrying in {self.retry_delay}s "
                        f"({attempts_left} attempt(s) left)"
                    )
                    await asyncio.sleep(self.retry_delay)
                    continue

                if kind is ErrorKind.UNAVAILABLE:
                    logger.error(f"Generation backend unavailable: {e}")
                    raise ServiceUnavailableError(
                        "Generation service is overloaded. Please try again later."
                    ) from e

                logger.error(f"Generation request failed: {e}")
                raise GenerationError("Generation request failed") from e

    async def generate_text(self, prompt: str, system_instruction: str | None = None) -> str:
        """Run a generation call and return its text ("" when none)."""
        result = await self.generate(prompt, system_instruction=system_instruction)
        return extract_text(result)
