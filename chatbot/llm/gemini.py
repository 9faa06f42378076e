"""Google Gemini LLM provider implementation."""

import logging
from typing import Any

import google.generativeai as genai
from pydantic import BaseModel

from chatbot.llm.base import LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class GeminiConfig(BaseModel):
    """Configuration for Gemini provider."""

    api_key: str
    model: str = "gemini-1.5-flash"
    max_tokens: int = 300
    temperature: float = 0.7
    timeout: float = 8.0


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation."""

    def __init__(self, config: GeminiConfig | None = None, **kwargs: Any) -> None:
        """Initialize Gemini provider.

        Args:
            config: Gemini configuration
            **kwargs: Additional configuration options
        """
        self.config = config or GeminiConfig(**kwargs)
        genai.configure(api_key=self.config.api_key)
        self.model = genai.GenerativeModel(self.config.model)

    async def generate_response(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> ResponseResult:
        """Generate a completion with Gemini's async API.

        A response without candidate text (safety block, empty candidate
        list) is returned as an unsuccessful result rather than raised.
        """
        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    max_output_tokens=max_tokens or self.config.max_tokens,
                    temperature=self.config.temperature if temperature is None else temperature,
                    candidate_count=1,
                ),
                request_options={"timeout": timeout or self.config.timeout},
            )
        except Exception as e:
            logger.error(f"Gemini response request failed: {e}")
            raise RuntimeError(f"Failed to generate response: {e}")

        try:
            text = response.text
        except ValueError as e:
            logger.warning(f"Gemini returned no answer text: {e}")
            return ResponseResult(
                content="",
                model=self.config.model,
                success=False,
                error=str(e),
            )

        return ResponseResult(
            content=text,
            model=self.config.model,
            token_count=response.usage_metadata.total_token_count
            if response.usage_metadata
            else None,
            finish_reason=response.candidates[0].finish_reason.name
            if response.candidates
            else None,
        )

    async def health_check(self) -> bool:
        """Check if Gemini service is accessible."""
        try:
            genai.get_model(f"models/{self.config.model}")
            return True
        except Exception as e:
            logger.warning(f"Gemini health check failed: {e}")
            return False
