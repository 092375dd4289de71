"""Tests for LLM providers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from travelbot.llm.base import LLMProviderFactory
from travelbot.llm.gemini import GeminiConfig, GeminiProvider
from travelbot.llm.openai import OpenAIConfig, OpenAIProvider


class TestLLMProviderFactory:
    """Test the LLM provider factory."""

    def test_create_openai_provider(self):
        """Test creating OpenAI provider."""
        provider = LLMProviderFactory.create("openai", api_key="test-key")
        assert isinstance(provider, OpenAIProvider)
        assert provider.config.api_key == "test-key"

    def test_create_unknown_provider(self):
        """Test creating unknown provider raises error."""
        with pytest.raises(ValueError, match="Unknown provider 'unknown'"):
            LLMProviderFactory.create("unknown")


class TestGeminiProvider:
    """Test Gemini provider."""

    @pytest.fixture
    def mock_genai(self):
        with patch("travelbot.llm.gemini.genai") as mock_genai:
            yield mock_genai

    def test_configures_api_key(self, mock_genai):
        """Test that the SDK is configured once with the API key."""
        GeminiProvider(GeminiConfig(api_key="test-key"))

        mock_genai.configure.assert_called_once_with(api_key="test-key")

    @pytest.mark.asyncio
    async def test_generate_content_returns_raw_response(self, mock_genai):
        """Test that the raw SDK response is returned."""
        raw = MagicMock()
        model = mock_genai.GenerativeModel.return_value
        model.generate_content_async = AsyncMock(return_value=raw)

        provider = GeminiProvider(GeminiConfig(api_key="test-key"))
        result = await provider.generate_content("hello", system_instruction="be nice")

        assert result is raw
        mock_genai.GenerativeModel.assert_called_once_with(
            "gemini-2.5-flash",
            system_instruction="be nice",
        )
        assert model.generate_content_async.call_args[0][0] == "hello"

    @pytest.mark.asyncio
    async def test_model_handle_reused_per_instruction(self, mock_genai):
        """Test that one model handle is built per system instruction."""
        model = mock_genai.GenerativeModel.return_value
        model.generate_content_async = AsyncMock(return_value=MagicMock())

        provider = GeminiProvider(GeminiConfig(api_key="test-key"))
        await provider.generate_content("a", system_instruction="one")
        await provider.generate_content("b", system_instruction="one")
        await provider.generate_content("c", system_instruction="two")

        assert mock_genai.GenerativeModel.call_count == 2

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_genai):
        """Test that backend errors are not wrapped by the provider."""
        error = RuntimeError("429 Resource has been exhausted")
        model = mock_genai.GenerativeModel.return_value
        model.generate_content_async = AsyncMock(side_effect=error)

        provider = GeminiProvider(GeminiConfig(api_key="test-key"))
        with pytest.raises(RuntimeError) as excinfo:
            await provider.generate_content("hello")

        assert excinfo.value is error


class TestOpenAIProvider:
    """Test OpenAI provider."""

    @pytest.fixture
    def openai_provider(self):
        """Create OpenAI provider for testing."""
        config = OpenAIConfig(api_key="test-key")
        return OpenAIProvider(config=config)

    @pytest.mark.asyncio
    async def test_generate_content_with_system_instruction(self, openai_provider):
        """Test that the system instruction becomes the first message."""
        mock_response = MagicMock()

        with patch.object(
            openai_provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=mock_response,
        ) as mock_create:
            result = await openai_provider.generate_content("test prompt", "be brief")

            assert result is mock_response
            messages = mock_create.call_args[1]["messages"]
            assert messages == [
                {"role": "system", "content": "be brief"},
                {"role": "user", "content": "test prompt"},
            ]
            assert mock_create.call_args[1]["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_generate_content_without_system_instruction(self, openai_provider):
        """Test a prompt without system instruction."""
        with patch.object(
            openai_provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=MagicMock(),
        ) as mock_create:
            await openai_provider.generate_content("test prompt")

            messages = mock_create.call_args[1]["messages"]
            assert messages == [{"role": "user", "content": "test prompt"}]
