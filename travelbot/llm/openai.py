"""OpenAI provider implementation."""

import logging
from typing import Any

import openai
from pydantic import BaseModel

from travelbot.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIConfig(BaseModel):
    """Configuration for OpenAI provider."""

    api_key: str
    model: str = "gpt-4o-mini"
    max_tokens: int = 1000
    temperature: float = 0.7
    timeout: int = 30
    # The gateway owns the retry policy.
    max_retries: int = 0


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider implementation."""

    def __init__(self, config: OpenAIConfig | None = None, **kwargs: Any) -> None:
        """Initialize OpenAI provider.

        Args:
            config: OpenAI configuration
            **kwargs: Additional configuration options
        """
        self.config = config or OpenAIConfig(**kwargs)
        self.client = openai.AsyncOpenAI(
            api_key=self.config.api_key,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )
        logger.info(f"OpenAI provider initialized with model {self.config.model}")

    async def generate_content(self, prompt: str, system_instruction: str | None = None) -> Any:
        """Generate a chat completion.

        Args:
            prompt: User prompt
            system_instruction: Optional system message

        Returns:
            Raw ``ChatCompletion``
        """
        messages = []

        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})

        messages.append({"role": "user", "content": prompt})

        return await self.client.chat.completions.create(
            model=self.config.model,
            messages=messages,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
