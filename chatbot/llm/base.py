"""Base LLM provider interface and registry."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class ResponseResult(BaseModel):
    """Result from response generation."""

    content: str
    model: str
    token_count: int | None = None
    finish_reason: str | None = None
    success: bool = True
    error: str | None = None

    @property
    def has_text(self) -> bool:
        """True when the provider returned a usable, non-blank answer."""
        return self.success and bool(self.content.strip())


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def generate_response(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> ResponseResult:
        """Generate a single best completion for the prompt.

        Args:
            prompt: Full prompt text
            max_tokens: Override for the maximum number of output tokens
            temperature: Override for the sampling temperature
            timeout: Transport timeout in seconds

        Returns:
            ResponseResult with generated text and metadata

        Raises:
            RuntimeError: If the provider request fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is healthy and accessible.

        Returns:
            True if healthy, False otherwise
        """
        pass

    async def aclose(self) -> None:
        """Release any connections the provider holds."""
        return None


class LLMProviderFactory:
    """Registry-backed factory for LLM providers."""

    _providers: dict[str, type[LLMProvider]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type[LLMProvider]) -> None:
        """Register a provider class.

        Args:
            name: Provider name (e.g., "gemini", "ollama")
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

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())
