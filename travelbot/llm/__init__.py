"""Generation providers and the model gateway."""

from travelbot.llm.base import LLMProvider, LLMProviderFactory
from travelbot.llm.factory import create_llm_provider
from travelbot.llm.gateway import ErrorKind, ModelGateway, classify_error, extract_text
from travelbot.llm.gemini import GeminiConfig, GeminiProvider
from travelbot.llm.openai import OpenAIConfig, OpenAIProvider

# Register all providers
LLMProviderFactory.register("gemini", GeminiProvider)
LLMProviderFactory.register("openai", OpenAIProvider)

__all__ = [
    "ErrorKind",
    "GeminiConfig",
    "GeminiProvider",
    "LLMProvider",
    "LLMProviderFactory",
    "ModelGateway",
    "OpenAIConfig",
    "OpenAIProvider",
    "classify_error",
    "create_llm_provider",
    "extract_text",
]
