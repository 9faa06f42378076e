"""LLM providers module."""

from chatbot.llm.base import LLMProvider, LLMProviderFactory, ResponseResult
from chatbot.llm.factory import create_llm_provider
from chatbot.llm.gemini import GeminiConfig, GeminiProvider
from chatbot.llm.ollama import OllamaConfig, OllamaProvider

# Register all providers
LLMProviderFactory.register("gemini", GeminiProvider)
LLMProviderFactory.register("ollama", OllamaProvider)

__all__ = [
    "GeminiConfig",
    "GeminiProvider",
    "LLMProvider",
    "LLMProviderFactory",
    "OllamaConfig",
    "OllamaProvider",
    "ResponseResult",
    "create_llm_provider",
]
