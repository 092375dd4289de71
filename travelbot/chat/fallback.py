"""Conversational answers for queries without structured results."""

import logging

from travelbot.chat.models import AIResponse, ChatLanguage, Intent
from travelbot.chat.prompts import DATABASE_MISS_HINT, EMPTY_REPLY, REPLY_SYSTEM_PROMPTS
from travelbot.llm.gateway import ModelGateway

logger = logging.getLogger(__name__)


def reply_prompt(message: str, database_miss: bool = False) -> str:
    if database_miss:
        return f"{message}\n\n{DATABASE_MISS_HINT}"
    return message


class FallbackGenerator:
    """Generates a free-text travel answer."""

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    async def generate(
        self,
        message: str,
        lang: ChatLanguage,
        intent: Intent = Intent.OTHER,
        database_miss: bool = False,
    ) -> AIResponse:
        """Answer ``message`` in ``lang``.

        Args:
            message: Trimmed user query
            lang: Reply language
            intent: Classified intent, for logging
            database_miss: Whether a structured search came back empty

        Returns:
            An ``ai`` response
        """
        logger.info(
            f"Generating conversational reply (intent={intent.value}, database_miss={database_miss})"
        )
        text = await self.gateway.generate_text(
            reply_prompt(message, database_miss),
            system_instruction=REPLY_SYSTEM_PROMPTS[lang],
        )
        if not text:
            logger.warning("Generation returned no text, answering with apology")
            text = EMPTY_REPLY[lang]
        return AIResponse(text=text)
