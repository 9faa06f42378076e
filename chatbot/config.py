"""Configuration management using pydantic-settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    GEMINI = "gemini"
    OLLAMA = "ollama"


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # LLM Provider Configuration
    llm_provider: LLMProvider = Field(
        default=LLMProvider.GEMINI,
        description="LLM provider used for free-form answers",
    )

    # Google Gemini Configuration
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Google Gemini model to use",
    )

    # Ollama Configuration
    ollama_host: str | None = Field(
        default=None,
        description="Ollama API host URL, e.g. http://localhost:11434",
    )
    ollama_model: str = Field(
        default="llama3.2",
        description="Ollama model to use",
    )

    # Notion Configuration
    notion_api_key: str | None = Field(None, description="Notion integration token")
    notion_faq_database_id: str | None = Field(None, description="Notion FAQ database ID")
    notion_services_database_id: str | None = Field(None, description="Notion services database ID")
    notion_company_info_database_id: str | None = Field(
        None, description="Notion company info database ID"
    )
    notion_faq_active_only: bool = Field(
        default=False,
        description="Only use FAQ entries whose Status is Active for the chat pipeline",
    )

    # Response pipeline
    kb_search_threshold: float = Field(
        default=0.5,
        description="Minimum keyword similarity for a knowledge base result",
    )
    kb_confidence_threshold: float = Field(
        default=0.65,
        description="Boosted similarity a knowledge base match must exceed to answer directly",
    )
    ai_timeout_seconds: float = Field(
        default=8.0,
        description="Hard deadline for a single AI call",
    )
    ai_max_tokens: int = Field(default=300, description="Max output tokens for chat answers")
    ai_temperature: float = Field(default=0.7, description="Sampling temperature for chat answers")

    # Website
    site_url: str = Field(
        default="https://redcatpictures.com/",
        description="Public website used as context for the site assistant",
    )
    site_proxy_url: str = Field(
        default="https://api.allorigins.win/raw?url=",
        description="Raw-HTML proxy prefix used to fetch website pages",
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="HTTP bind host")
    port: int = Field(default=3000, description="HTTP bind port")
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )

    @property
    def has_notion(self) -> bool:
        """Whether the FAQ knowledge base can be queried."""
        return bool(self.notion_api_key and self.notion_faq_database_id)

    @property
    def has_ai(self) -> bool:
        """Whether the configured LLM provider has what it needs to run."""
        if self.llm_provider == LLMProvider.GEMINI:
            return bool(self.gemini_api_key)
        if self.llm_provider == LLMProvider.OLLAMA:
            return bool(self.ollama_host)
        return False

    def validate_provider_config(self) -> None:
        """Validate pipeline thresholds and the selected provider's settings.

        Missing credentials are not an error: the matching pipeline stage
        is skipped. Values that can never work are.
        """
        if not 0.0 <= self.kb_search_threshold <= 1.0:
            raise ValueError("kb_search_threshold must be between 0 and 1")
        if not 0.0 <= self.kb_confidence_threshold <= 1.0:
            raise ValueError("kb_confidence_threshold must be between 0 and 1")
        if self.ai_timeout_seconds <= 0:
            raise ValueError("ai_timeout_seconds must be positive")
        if self.llm_provider == LLMProvider.OLLAMA and self.ollama_host is not None:
            if not self.ollama_host.startswith(("http://", "https://")):
                raise ValueError("Ollama host must be an http(s) URL")


# Global settings instance - lazy loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
