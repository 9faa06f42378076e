"""Response pipeline: knowledge base, then AI, then canned fallback."""

import asyncio
import logging
import time
from typing import Any

from chatbot.config import Settings, get_settings
from chatbot.llm.base import LLMProvider
from .intent import IntentClassifier
from .models import (
    BotResponse,
    ConversationTurn,
    IntentResult,
    ResponseMetadata,
    ResponseSource,
    SearchResult,
)
from .scoring import RelevanceScorer
from .search import KnowledgeBaseSearch
from .templates import (
    BUSINESS_NAME,
    ERROR_TEMPLATE,
    KNOWLEDGE_BASE_SUFFIX,
    fallback_template,
    render_text,
)

logger = logging.getLogger(__name__)

AI_CONTEXT_RESULTS = 2
AI_CONFIDENCE_WITH_CONTEXT = 0.7
AI_CONFIDENCE_WITHOUT_CONTEXT = 0.6
FALLBACK_CONFIDENCE = 0.5


class ResponseArbitrator:
    """Decides which source answers a visitor message.

    Stages run in order and the first one that produces an answer wins:
    a high-confidence knowledge base match, an AI answer grounded on the
    knowledge base results, the best low-confidence knowledge base match,
    and finally a canned response for the detected intent.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBaseSearch | None = None,
        llm_provider: LLMProvider | None = None,
        classifier: IntentClassifier | None = None,
        scorer: RelevanceScorer | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the arbitrator.

        Args:
            knowledge_base: FAQ search, or None to skip the knowledge base stage
            llm_provider: LLM provider, or None to skip the AI stage
            classifier: Intent classifier
            scorer: Relevance scorer used for the boost pass
            settings: Thresholds and timeouts, defaults to the global settings
        """
        self.knowledge_base = knowledge_base
        self.llm_provider = llm_provider
        self.classifier = classifier or IntentClassifier()
        self.scorer = scorer or RelevanceScorer()
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ResponseArbitrator":
        """Build an arbitrator with every collaborator the settings allow."""
        settings = settings or get_settings()

        knowledge_base = None
        if settings.has_notion:
            from chatbot.notion import NotionClient

            knowledge_base = KnowledgeBaseSearch(NotionClient(settings=settings))
        else:
            logger.warning("Notion not configured, knowledge base stage disabled")

        llm_provider = None
        if settings.has_ai:
            from chatbot.llm import create_llm_provider

            llm_provider = create_llm_provider(settings=settings)
        else:
            logger.warning("AI provider not configured, AI stage disabled")

        return cls(knowledge_base=knowledge_base, llm_provider=llm_provider, settings=settings)

    async def respond(
        self,
        message: Any,
        history: list[ConversationTurn] | None = None,
    ) -> BotResponse:
        """Produce a response for a visitor message.

        Always returns a BotResponse. Collaborator failures fall through to
        the next stage; anything else produces the error response.

        Args:
            message: Visitor message
            history: Prior conversation turns, currently not used for answering
        """
        start_time = time.time()

        if not isinstance(message, str) or not message.strip():
            logger.error("Invalid message received")
            return error_response("Invalid message")

        try:
            message = message.strip()
            logger.info(f"Processing message: {message}")
            if history:
                logger.debug(f"Ignoring {len(history)} prior conversation turns")

            intent_result = self.classifier.classify(message)
            logger.info(
                f"Intent: {intent_result.intent.value}, entities: {list(intent_result.entities)}, "
                f"sentiment: {intent_result.sentiment.value}"
            )

            search_results: list[SearchResult] = []
            if self.knowledge_base is not None:
                search_results, response = await self._try_knowledge_base(message, intent_result)
                if response is not None:
                    return self._finish(response, start_time)
            else:
                logger.info("Knowledge base not configured, skipping")

            if self.llm_provider is not None:
                response = await self._try_ai(message, intent_result, search_results)
                if response is not None:
                    return self._finish(response, start_time)
            else:
                logger.info("AI provider not configured, skipping")

            logger.info("Using structured fallback")
            return self._finish(fallback_response(intent_result, search_results), start_time)

        except Exception as e:
            logger.error(f"Critical error in response pipeline: {e}", exc_info=True)
            logger.info(f"Error after {(time.time() - start_time) * 1000:.0f}ms")
            return error_response(str(e))

    async def _try_knowledge_base(
        self,
        message: str,
        intent_result: IntentResult,
    ) -> tuple[list[SearchResult], BotResponse | None]:
        """Search the FAQ database and answer directly on a strong match.

        Returns the raw search results for later stages along with the
        response, which is None when no match clears the confidence bar.
        """
        try:
            logger.info("Attempting knowledge base search...")
            results = await self.knowledge_base.search(
                message, threshold=self.settings.kb_search_threshold
            )
            best = self.scorer.select_best_response(results, intent_result)
        except Exception as e:
            logger.error(f"Knowledge base stage failed: {e}")
            return [], None

        if best is None or best.similarity <= self.settings.kb_confidence_threshold:
            if best is not None:
                logger.info(f"Best knowledge base match too weak: {best.similarity:.0%}")
            return results, None

        logger.info(f"High confidence knowledge base match: {best.similarity:.1%}")
        response = BotResponse(
            response=render_text(best.content),
            confidence=best.similarity,
            source=ResponseSource.KNOWLEDGE_BASE,
            metadata=_metadata(intent_result, matched_question=best.question),
        )
        return results, response

    def build_prompt(
        self,
        message: str,
        intent_result: IntentResult,
        search_results: list[SearchResult],
    ) -> str:
        """Build the AI prompt from the intent and the top FAQ matches."""
        context = "\n\n".join(
            f"FAQ {i}: {result.question}\n{result.content}"
            for i, result in enumerate(search_results[:AI_CONTEXT_RESULTS], 1)
        )
        topics = ", ".join(intent_result.entities) or "general"
        knowledge = f"Knowledge:\n{context}\n\n" if context else ""

        return (
            f"You are {BUSINESS_NAME} AI assistant. "
            "Respond in 2-3 sentences about photography services.\n\n"
            f"User Intent: {intent_result.intent.value}\n"
            f"Topics: {topics}\n\n"
            f"{knowledge}"
            "Answer the user's question helpfully and concisely.\n\n"
            f"Question: {message}"
        )

    async def _try_ai(
        self,
        message: str,
        intent_result: IntentResult,
        search_results: list[SearchResult],
    ) -> BotResponse | None:
        """Ask the LLM once, giving up at the configured deadline."""
        prompt = self.build_prompt(message, intent_result, search_results)
        timeout = self.settings.ai_timeout_seconds

        try:
            logger.info("Attempting AI response...")
            result = await asyncio.wait_for(
                self.llm_provider.generate_response(
                    prompt,
                    max_tokens=self.settings.ai_max_tokens,
                    temperature=self.settings.ai_temperature,
                    timeout=timeout,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"AI request cancelled after {timeout}s")
            return None
        except Exception as e:
            logger.error(f"AI request failed: {e}")
            return None

        if not result.has_text:
            logger.warning(f"AI returned no usable answer: {result.error}")
            return None

        context_used = bool(search_results)
        logger.info("AI response generated")
        return BotResponse(
            response=render_text(result.content),
            confidence=AI_CONFIDENCE_WITH_CONTEXT if context_used else AI_CONFIDENCE_WITHOUT_CONTEXT,
            source=ResponseSource.AI,
            metadata=_metadata(intent_result, context_used=context_used),
        )

    def _finish(self, response: BotResponse, start_time: float) -> BotResponse:
        logger.info(
            f"Responded from {response.source.value} with {response.confidence:.0%} confidence "
            f"in {(time.time() - start_time) * 1000:.0f}ms"
        )
        return response


def _metadata(intent_result: IntentResult, **extra: Any) -> ResponseMetadata:
    return ResponseMetadata(
        intent=intent_result.intent.value,
        entities=list(intent_result.entities),
        sentiment=intent_result.sentiment.value,
        **extra,
    )


def fallback_response(
    intent_result: IntentResult,
    search_results: list[SearchResult],
) -> BotResponse:
    """Best weak knowledge base match if there is one, else the intent template."""
    if search_results:
        top = search_results[0]
        return BotResponse(
            response=render_text(top.content) + KNOWLEDGE_BASE_SUFFIX,
            confidence=top.similarity,
            source=ResponseSource.NOTION_FALLBACK,
            metadata=_metadata(intent_result, matched_question=top.question),
        )

    return BotResponse(
        response=fallback_template(intent_result.intent),
        confidence=FALLBACK_CONFIDENCE,
        source=ResponseSource.FALLBACK,
        metadata=_metadata(intent_result),
    )


def error_response(error_message: str) -> BotResponse:
    """Generic contact-us response; the error text only goes into metadata."""
    return BotResponse(
        response=ERROR_TEMPLATE,
        confidence=0.0,
        source=ResponseSource.ERROR,
        metadata=ResponseMetadata(intent="error", error_details=error_message),
    )
