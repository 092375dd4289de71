"""Factory for creating generation providers from configuration."""

from travelbot.config import LLMProvider as LLMProviderEnum
from travelbot.config import Settings, get_settings
from travelbot.errors import ConfigurationError
from travelbot.llm.base import LLMProvider, LLMProviderFactory


def create_llm_provider(
    provider_name: str | None = None,
    settings: Settings | None = None,
) -> LLMProvider:
    """Create generation provider from configuration.

    Args:
        provider_name: Override provider name, defaults to settings.llm_provider
        settings: Settings to read, defaults to the global settings

    Returns:
        Configured LLM provider instance

    Raises:
        ConfigurationError: If the selected provider has no API key
        ValueError: If the provider name is unknown
    """
    settings = settings or get_settings()
    provider_name = provider_name or settings.llm_provider

    if provider_name == LLMProviderEnum.GEMINI:
        from travelbot.llm.gemini import GeminiConfig

        if not settings.gemini_api_key:
            raise ConfigurationError("Gemini API key is not configured")

        config = GeminiConfig(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )
        return LLMProviderFactory.create("gemini", config=config)

    elif provider_name == LLMProviderEnum.OPENAI:
        from travelbot.llm.openai import OpenAIConfig

        if not settings.openai_api_key:
            raise ConfigurationError("OpenAI API key is not configured")

        config = OpenAIConfig(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )
        return LLMProviderFactory.create("openai", config=config)

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
