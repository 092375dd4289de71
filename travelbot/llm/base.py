"""Base generation provider interface and factory pattern."""

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """Abstract base class for generation backends.

    Providers return the backend's raw result object and let backend errors
    propagate untouched; classification, retries and text extraction are
    the job of :class:`travelbot.llm.gateway.ModelGateway`.
    """

    @abstractmethod
    async def generate_content(self, prompt: str, system_instruction: str | None = None) -> Any:
        """Run a single generation request.

        Args:
            prompt: User prompt
            system_instruction: Optional system instruction for the model

        Returns:
            Raw backend result
        """
        pass


class LLMProviderFactory:
    """Factory for creating generation providers."""

    _providers: dict[str, type[LLMProvider]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type[LLMProvider]) -> None:
        """Register a provider class.

        Args:
            name: Provider name (e.g., "gemini", "openai")
            provider_class: Provider class to register
        """
        cls._providers[name] = provider_class

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> LLMProvider:
        """Create a provider instance.

        Args:
            name: Provider name
            **kwargs: Provider-specific configuration

        Returns:
            LLMProvider instance

        Raises:
            ValueError: If provider name is not registered
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(f"Unknown provider '{name}'. Available: {available}")

        return cls._providers[name](**kwargs)
