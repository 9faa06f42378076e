"""Data models for the chat response pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intent(str, Enum):
    """What the visitor is asking about."""

    PRICING_INQUIRY = "pricing_inquiry"
    BOOKING_INTENT = "booking_intent"
    SERVICE_INQUIRY = "service_inquiry"
    CONTACT_REQUEST = "contact_request"
    ABOUT_INQUIRY = "about_inquiry"
    PORTFOLIO_REQUEST = "portfolio_request"
    GENERAL_INQUIRY = "general_inquiry"


class Sentiment(str, Enum):
    """Tone of the visitor's message."""

    URGENT = "urgent"
    POSITIVE = "positive"
    UNCERTAIN = "uncertain"
    NEUTRAL = "neutral"


class ResponseSource(str, Enum):
    """Which pipeline stage produced a response."""

    KNOWLEDGE_BASE = "knowledge_base"
    AI = "ai"
    NOTION_FALLBACK = "notion-fallback"
    FALLBACK = "fallback"
    ERROR = "error"


@dataclass(frozen=True)
class IntentResult:
    """Intent, entity tags and sentiment extracted from one message."""

    intent: Intent = Intent.GENERAL_INQUIRY
    entities: tuple[str, ...] = ()
    sentiment: Sentiment = Sentiment.NEUTRAL


@dataclass(frozen=True)
class FAQDocument:
    """A single question/answer entry from the knowledge base."""

    question: str
    answer: str
    category: str = ""

    @property
    def text(self) -> str:
        """Question and answer joined for keyword matching."""
        return f"{self.question} {self.answer}"


@dataclass
class SearchResult:
    """A knowledge base entry scored against a query."""

    content: str
    similarity: float
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def question(self) -> str:
        return self.metadata.get("question", "")

    @property
    def category(self) -> str:
        return self.metadata.get("category") or ""


class ConversationTurn(BaseModel):
    """A prior turn sent along with the message."""

    role: str
    content: str


class ChatRequest(BaseModel):
    """Body of a chat request."""

    model_config = ConfigDict(populate_by_name=True)

    message: Any = None
    conversation_history: list[ConversationTurn] = Field(
        default_factory=list, alias="conversationHistory"
    )

    @field_validator("conversation_history", mode="before")
    @classmethod
    def drop_malformed_turns(cls, value: Any) -> list[Any]:
        """Keep only well-formed turns; history never rejects a request."""
        if not isinstance(value, list):
            return []
        return [
            turn
            for turn in value
            if isinstance(turn, ConversationTurn)
            or (
                isinstance(turn, dict)
                and isinstance(turn.get("role"), str)
                and isinstance(turn.get("content"), str)
            )
        ]


class ResponseMetadata(BaseModel):
    """Diagnostics attached to every bot response."""

    model_config = ConfigDict(populate_by_name=True)

    intent: str
    entities: list[str] = Field(default_factory=list)
    sentiment: str = Sentiment.NEUTRAL.value
    matched_question: str | None = Field(default=None, alias="matchedQuestion")
    context_used: bool | None = Field(default=None, alias="contextUsed")
    error_details: str | None = Field(default=None, alias="errorDetails")


class BotResponse(BaseModel):
    """The response returned to the website widget."""

    response: str
    confidence: float = Field(ge=0.0, le=1.0)
    source: ResponseSource
    metadata: ResponseMetadata

    def to_json(self) -> dict[str, Any]:
        """Serialize with the camelCase field names the widget expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
