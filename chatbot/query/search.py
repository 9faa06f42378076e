"""Keyword search over the FAQ knowledge base."""

import logging
from typing import Protocol

from .models import FAQDocument, SearchResult
from .scoring import RelevanceScorer

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Anything that can hand back the current FAQ entries."""

    async def get_faq_documents(self) -> list[FAQDocument]:
        ...


class KnowledgeBaseSearch:
    """Fetches the FAQ corpus and ranks it against a query."""

    def __init__(
        self,
        store: DocumentStore,
        scorer: RelevanceScorer | None = None,
    ):
        """Initialize the search.

        Args:
            store: Source of FAQ documents, queried on every search
            scorer: Relevance scorer, defaults to RelevanceScorer()
        """
        self.store = store
        self.scorer = scorer or RelevanceScorer()

    def rank(
        self,
        query: str,
        corpus: list[FAQDocument],
        threshold: float,
    ) -> list[SearchResult]:
        """Score documents and return those at or above the threshold.

        Entries missing a question or an answer are skipped. Results are
        sorted by similarity, highest first; equal scores keep corpus order.
        """
        valid = [doc for doc in corpus if doc.question and doc.answer]
        if len(valid) < len(corpus):
            logger.debug(f"Skipped {len(corpus) - len(valid)} incomplete FAQ entries")

        results = []
        for doc in valid:
            similarity = self.scorer.score(query, doc)
            if similarity >= threshold:
                results.append(
                    SearchResult(
                        content=doc.answer,
                        similarity=similarity,
                        metadata={"question": doc.question, "category": doc.category},
                    )
                )

        results.sort(key=lambda r: r.similarity, reverse=True)
        return results

    async def search(self, query: str, threshold: float = 0.5) -> list[SearchResult]:
        """Search the knowledge base.

        Never raises: store or parsing failures are logged and produce an
        empty result list.
        """
        try:
            corpus = await self.store.get_faq_documents()
            if not corpus:
                logger.warning("No FAQ entries found in knowledge base")
                return []

            logger.info(f"Found {len(corpus)} FAQ entries")
            results = self.rank(query, corpus, threshold)
        except Exception as e:
            logger.error(f"Knowledge base search failed: {e}", exc_info=True)
            return []

        logger.info(f"Found {len(results)} matches above threshold {threshold}")
        return results
