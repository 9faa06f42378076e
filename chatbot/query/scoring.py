"""Keyword relevance scoring and intent-aware boosting."""

from dataclasses import replace

from .models import FAQDocument, Intent, IntentResult, SearchResult

MIN_WORD_LENGTH = 4
CATEGORY_BOOST = 0.15
ENTITY_BOOST = 0.10

# Category keyword that marks an FAQ entry as matching the intent.
INTENT_CATEGORY_KEYWORDS: dict[Intent, str] = {
    Intent.PRICING_INQUIRY: "pricing",
    Intent.BOOKING_INTENT: "booking",
    Intent.SERVICE_INQUIRY: "service",
    Intent.CONTACT_REQUEST: "contact",
    Intent.ABOUT_INQUIRY: "about",
    Intent.PORTFOLIO_REQUEST: "portfolio",
}


def query_keywords(query: str) -> list[str]:
    """Lower-cased query words long enough to be worth matching."""
    return [word for word in query.lower().split() if len(word) >= MIN_WORD_LENGTH]


def keyword_similarity(query: str, text: str) -> float:
    """Fraction of query keywords found anywhere in the text.

    Words are matched as plain substrings, so "shoot" matches "shooting".
    Returns 0.0 when the query has no keywords.
    """
    words = query_keywords(query)
    if not words:
        return 0.0

    text_lower = text.lower()
    matches = sum(1 for word in words if word in text_lower)
    return matches / len(words)


class RelevanceScorer:
    """Scores FAQ entries against a query and re-ranks them by intent."""

    def score(self, query: str, document: FAQDocument) -> float:
        """Base similarity between a query and an FAQ entry."""
        return keyword_similarity(query, document.text)

    def boost(self, result: SearchResult, intent_result: IntentResult) -> SearchResult:
        """Return a copy of the result with category and entity boosts applied.

        All boosts are added before the score is clamped to 1.0.
        """
        score = result.similarity
        category = result.category.lower()
        question = result.question.lower()

        keyword = INTENT_CATEGORY_KEYWORDS.get(intent_result.intent)
        if keyword and keyword in category:
            score += CATEGORY_BOOST

        for entity in intent_result.entities:
            if entity in question or entity in category:
                score += ENTITY_BOOST

        return replace(result, similarity=min(score, 1.0))

    def select_best_response(
        self,
        results: list[SearchResult],
        intent_result: IntentResult,
    ) -> SearchResult | None:
        """Pick the highest scoring result after boosting.

        Ties go to the earlier result. The input list is not modified.
        """
        if not results:
            return None

        boosted = [self.boost(result, intent_result) for result in results]
        return max(boosted, key=lambda r: r.similarity)
