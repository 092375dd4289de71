"""Google Gemini provider implementation."""

import logging
from typing import Any

import google.generativeai as genai
from pydantic import BaseModel

from travelbot.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiConfig(BaseModel):
    """Configuration for Gemini provider."""

    api_key: str
    model: str = "gemini-2.5-flash"
    max_tokens: int = 1000
    temperature: float = 0.7


class GeminiProvider(LLMProvider):
    """Google Gemini provider implementation."""

    def __init__(self, config: GeminiConfig | None = None, **kwargs: Any) -> None:
        """Initialize Gemini provider.

        Args:
            config: Gemini configuration
            **kwargs: Additional configuration options
        """
        self.config = config or GeminiConfig(**kwargs)
        genai.configure(api_key=self.config.api_key)
        # System instructions are bound at model construction, so keep one
        # handle per instruction.
        self._models: dict[str | None, genai.GenerativeModel] = {}

    def _get_model(self, system_instruction: str | None) -> genai.GenerativeModel:
        model = self._models.get(system_instruction)
        if model is None:
            model = genai.GenerativeModel(
                self.config.model,
                system_instruction=system_instruction,
            )
            self._models[system_instruction] = model
            logger.debug(f"Created {self.config.model} handle ({len(self._models)} cached)")
        return model

    async def generate_content(self, prompt: str, system_instruction: str | None = None) -> Any:
        """Generate content using Gemini.

        Args:
            prompt: User prompt
            system_instruction: Optional system instruction

        Returns:
            Raw ``GenerateContentResponse``
        """
        model = self._get_model(system_instruction)
        return await model.generate_content_async(
            prompt,
            generation_config=genai.types.GenerationConfig(
                max_output_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            ),
        )
