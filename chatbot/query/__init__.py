"""Chat response pipeline module."""

from .intent import IntentClassifier, classify
from .models import BotResponse, FAQDocument, Intent, IntentResult, SearchResult, Sentiment
from .processor import ResponseArbitrator
from .scoring import RelevanceScorer
from .search import KnowledgeBaseSearch

__all__ = [
    "BotResponse",
    "FAQDocument",
    "Intent",
    "IntentClassifier",
    "IntentResult",
    "KnowledgeBaseSearch",
    "RelevanceScorer",
    "ResponseArbitrator",
    "SearchResult",
    "Sentiment",
    "classify",
]
