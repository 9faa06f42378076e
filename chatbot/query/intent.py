"""Pattern-based intent, entity and sentiment extraction."""

import logging
import re

from .models import Intent, IntentResult, Sentiment

logger = logging.getLogger(__name__)

# Checked in order, first match wins. A message asking "how much to book"
# is a pricing question.
INTENT_PATTERNS: tuple[tuple[Intent, re.Pattern[str]], ...] = (
    (
        Intent.PRICING_INQUIRY,
        re.compile(r"price|pricing|cost|rate|package|charge|fee|budget|how much|quote"),
    ),
    (
        Intent.BOOKING_INTENT,
        re.compile(r"book|schedule|appointment|available|reserve|date|availability"),
    ),
    (
        Intent.SERVICE_INQUIRY,
        re.compile(r"service|offer|provide|what do you do|specializ|capability"),
    ),
    (
        Intent.CONTACT_REQUEST,
        re.compile(r"contact|phone|email|address|location|reach|call"),
    ),
    (
        Intent.ABOUT_INQUIRY,
        re.compile(r"team|member|founder|who are|people|staff|about|owner"),
    ),
    (
        Intent.PORTFOLIO_REQUEST,
        re.compile(r"photo|picture|portfolio|gallery|work|sample|example"),
    ),
)

# Every matching tag is kept.
ENTITY_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("wedding", re.compile(r"wedding|marriage|shaadi")),
    ("food", re.compile(r"food|cuisine|dish|meal|restaurant|culinary")),
    ("video", re.compile(r"video|film|cinema|cinematography")),
    ("event", re.compile(r"event|party|celebration|function")),
    ("portrait", re.compile(r"portrait|headshot|profile")),
    ("commercial", re.compile(r"commercial|business|corporate|product")),
)

SENTIMENT_PATTERNS: tuple[tuple[Sentiment, re.Pattern[str]], ...] = (
    (Sentiment.URGENT, re.compile(r"urgent|asap|immediately|quickly|rush")),
    (Sentiment.POSITIVE, re.compile(r"thank|great|love|amazing|wonderful|perfect")),
    (Sentiment.UNCERTAIN, re.compile(r"confused|not sure|maybe|thinking|considering")),
)


class IntentClassifier:
    """Classifies a visitor message with fixed keyword rules."""

    def classify(self, message: str) -> IntentResult:
        """Extract intent, entities and sentiment from a message.

        Args:
            message: Raw visitor message

        Returns:
            IntentResult, defaulting to general_inquiry / no entities / neutral
        """
        text = message.lower()

        intent = next(
            (intent for intent, pattern in INTENT_PATTERNS if pattern.search(text)),
            Intent.GENERAL_INQUIRY,
        )
        entities = tuple(tag for tag, pattern in ENTITY_PATTERNS if pattern.search(text))
        sentiment = next(
            (sentiment for sentiment, pattern in SENTIMENT_PATTERNS if pattern.search(text)),
            Sentiment.NEUTRAL,
        )

        logger.debug(
            f"Classified message: intent={intent.value} entities={list(entities)} "
            f"sentiment={sentiment.value}"
        )
        return IntentResult(intent=intent, entities=entities, sentiment=sentiment)


def classify(message: str) -> IntentResult:
    """Classify a message with the default rule set."""
    return IntentClassifier().classify(message)
