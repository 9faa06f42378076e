"""Tests for LLM factory functions."""

from unittest.mock import patch

import pytest

from chatbot.config import LLMProvider as LLMProviderEnum
from chatbot.config import Settings
from chatbot.llm.factory import create_llm_provider
from chatbot.llm.gemini import GeminiProvider
from chatbot.llm.ollama import OllamaProvider


class TestLLMFactory:
    """Test LLM factory functions."""

    @patch("chatbot.llm.gemini.genai")
    @patch("chatbot.llm.factory.get_settings")
    def test_create_gemini_provider(self, mock_get_settings, mock_genai):
        """Test creating Gemini provider from global settings."""
        mock_settings = mock_get_settings.return_value
        mock_settings.llm_provider = LLMProviderEnum.GEMINI
        mock_settings.gemini_api_key = "test-key"
        mock_settings.gemini_model = "gemini-1.5-flash"
        mock_settings.ai_max_tokens = 300
        mock_settings.ai_temperature = 0.7
        mock_settings.ai_timeout_seconds = 8.0

        provider = create_llm_provider()
        assert isinstance(provider, GeminiProvider)
        assert provider.config.api_key == "test-key"
        assert provider.config.timeout == 8.0

    @patch("chatbot.llm.factory.get_settings")
    def test_create_gemini_provider_missing_key(self, mock_get_settings):
        """Test creating Gemini provider without API key."""
        mock_settings = mock_get_settings.return_value
        mock_settings.llm_provider = LLMProviderEnum.GEMINI
        mock_settings.gemini_api_key = None

        with pytest.raises(ValueError, match="Gemini API key is required"):
            create_llm_provider()

    def test_create_ollama_provider(self):
        """Test creating Ollama provider from explicit settings."""
        settings = Settings(
            _env_file=None,
            llm_provider=LLMProviderEnum.OLLAMA,
            ollama_host="http://test:11434",
            ollama_model="llama3.2",
            ai_max_tokens=200,
        )

        provider = create_llm_provider(settings=settings)
        assert isinstance(provider, OllamaProvider)
        assert provider.config.host == "http://test:11434"
        assert provider.config.max_tokens == 200

    def test_create_ollama_provider_missing_host(self):
        """Test creating Ollama provider without a host."""
        settings = Settings(_env_file=None, llm_provider=LLMProviderEnum.OLLAMA)

        with pytest.raises(ValueError, match="Ollama host is required"):
            create_llm_provider(settings=settings)

    def test_provider_name_override(self):
        """Test overriding the configured provider."""
        settings = Settings(_env_file=None, ollama_host="http://test:11434")

        provider = create_llm_provider(LLMProviderEnum.OLLAMA, settings=settings)
        assert isinstance(provider, OllamaProvider)

    def test_unknown_provider(self):
        """Test that an unknown provider name is rejected."""
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm_provider("mystery", settings=Settings(_env_file=None))
