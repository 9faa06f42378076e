"""Factory for creating LLM providers from configuration."""

from chatbot.config import LLMProvider as LLMProviderEnum
from chatbot.config import Settings, get_settings
from chatbot.llm.base import LLMProvider, LLMProviderFactory


def create_llm_provider(
    provider_name: str | None = None,
    settings: Settings | None = None,
) -> LLMProvider:
    """Create LLM provider from configuration.

    Args:
        provider_name: Override provider name, defaults to settings.llm_provider
        settings: Settings to read from, defaults to the global settings

    Returns:
        Configured LLM provider instance

    Raises:
        ValueError: If provider configuration is invalid
    """
    settings = settings or get_settings()
    provider_name = provider_name or settings.llm_provider

    if provider_name == LLMProviderEnum.GEMINI:
        from chatbot.llm.gemini import GeminiConfig

        if not settings.gemini_api_key:
            raise ValueError("Gemini API key is required")

        config = GeminiConfig(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            timeout=settings.ai_timeout_seconds,
        )
        return LLMProviderFactory.create("gemini", config=config)

    elif provider_name == LLMProviderEnum.OLLAMA:
        from chatbot.llm.ollama import OllamaConfig

        if not settings.ollama_host:
            raise ValueError("Ollama host is required")

        config = OllamaConfig(
            host=settings.ollama_host,
            model=settings.ollama_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            timeout=settings.ai_timeout_seconds,
        )
        return LLMProviderFactory.create("ollama", config=config)

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
