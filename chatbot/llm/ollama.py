"""Ollama LLM provider implementation."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from chatbot.llm.base import LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class OllamaConfig(BaseModel):
    """Configuration for Ollama provider."""

    host: str = "http://localhost:11434"
    model: str = "llama3.2"
    max_tokens: int = 300
    temperature: float = 0.7
    timeout: float = 8.0


class OllamaProvider(LLMProvider):
    """Ollama LLM provider for self-hosted deployments."""

    def __init__(self, config: OllamaConfig | None = None, **kwargs: Any) -> None:
        """Initialize Ollama provider.

        Args:
            config: Ollama configuration
            **kwargs: Additional configuration options
        """
        self.config = config or OllamaConfig(**kwargs)
        self.client = httpx.AsyncClient(
            base_url=self.config.host,
            timeout=self.config.timeout,
        )

    async def generate_response(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> ResponseResult:
        """Generate a completion using Ollama's generate endpoint."""
        try:
            logger.debug(f"Sending request to Ollama with model: {self.config.model}")
            response = await self.client.post(
                "/api/generate",
                json={
                    "model": self.config.model,
                    "prompt": prompt,
                    "stream": False,
                    "options": {
                        "num_predict": max_tokens or self.config.max_tokens,
                        "temperature": self.config.temperature
                        if temperature is None
                        else temperature,
                    },
                },
                timeout=timeout or self.config.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Ollama request timed out: {e}")
            raise RuntimeError(f"Ollama request timed out: {e}")
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama response HTTP error: {e}")
            logger.error(f"Status: {e.response.status_code}")
            raise RuntimeError(f"Ollama API error: {e}")
        except httpx.RequestError as e:
            logger.error(f"Ollama response request failed: {e}")
            logger.error(f"Model: {self.config.model}, Host: {self.config.host}")
            raise RuntimeError(f"Failed to generate response: {e}")

        content = data.get("response") or ""
        return ResponseResult(
            content=content,
            model=self.config.model,
            token_count=data.get("eval_count"),
            finish_reason=data.get("done_reason"),
            success=bool(content),
            error=None if content else "Empty response from Ollama",
        )

    async def health_check(self) -> bool:
        """Check if Ollama service is healthy."""
        try:
            response = await self.client.get("/api/tags")
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama health check failed: {e}")
            return False

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
