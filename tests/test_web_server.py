"""Tests for the HTTP endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import test_utils

from chatbot.config import Settings
from chatbot.llm.base import LLMProvider
from chatbot.notion import CompanyInfo, FAQEntry, NotionClient, ServiceEntry
from chatbot.query import ResponseArbitrator
from chatbot.query.assistant import SiteAssistant
from chatbot.query.templates import FALLBACK_TEMPLATES
from chatbot.query.models import ChatRequest, ConversationTurn, Intent
from chatbot.site import SiteFetcher
from chatbot.web_server import WebServer


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def notion():
    client = MagicMock(spec=NotionClient)
    client.search_faq = AsyncMock(return_value=[])
    client.get_services = AsyncMock(return_value=[])
    client.get_company_info = AsyncMock(return_value=None)
    return client


@pytest.fixture
def fetcher():
    site = MagicMock(spec=SiteFetcher)
    site.fetch_html = AsyncMock(return_value="<html></html>")
    return site


@pytest.fixture
def assistant():
    site_assistant = MagicMock(spec=SiteAssistant)
    site_assistant.answer = AsyncMock(return_value="Hello from the studio")
    return site_assistant


@pytest.fixture
def server(settings, notion, fetcher, assistant):
    return WebServer(
        settings=settings,
        arbitrator=ResponseArbitrator(settings=settings),
        notion=notion,
        fetcher=fetcher,
        assistant=assistant,
    )


class TestHealth:
    """Test the health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, server):
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.get("/health")
            data = await resp.json()

        assert resp.status == 200
        assert data["status"] == "healthy"
        assert data["knowledge_base"] is False
        assert data["ai"] is False


class TestChatSemantic:
    """Test the main chat endpoint."""

    @pytest.mark.asyncio
    async def test_fallback_answer(self, server):
        """Test an answer when nothing is configured."""
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/chat-semantic",
                json={"message": "hi", "conversationHistory": [{"role": "user", "content": "x"}]},
            )
            data = await resp.json()

        assert resp.status == 200
        assert data == {
            "response": FALLBACK_TEMPLATES[Intent.GENERAL_INQUIRY],
            "confidence": 0.5,
            "source": "fallback",
            "metadata": {"intent": "general_inquiry", "entities": [], "sentiment": "neutral"},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "history",
        [None, "prev", [{"role": "user"}], [{"role": "user", "content": 5}], [42]],
    )
    async def test_malformed_history_is_ignored(self, server, history):
        """Test that a bad conversation history does not block an answer."""
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/chat-semantic", json={"message": "hi", "conversationHistory": history}
            )
            data = await resp.json()

        assert resp.status == 200
        assert data["source"] == "fallback"
        assert data["metadata"]["intent"] == "general_inquiry"

    def test_history_keeps_well_formed_turns(self):
        """Test that only valid turns survive request parsing."""
        body = ChatRequest.model_validate(
            {
                "message": "hi",
                "conversationHistory": [
                    {"role": "user", "content": "What are your prices?"},
                    {"role": "assistant"},
                    "stray",
                ],
            }
        )

        assert body.conversation_history == [
            ConversationTurn(role="user", content="What are your prices?")
        ]

    @pytest.mark.asyncio
    async def test_missing_message(self, server):
        """Test that a missing message gets the invalid message response."""
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/chat-semantic", json={})
            data = await resp.json()

        assert resp.status == 200
        assert data["source"] == "error"
        assert data["metadata"]["errorDetails"] == "Invalid message"

    @pytest.mark.asyncio
    async def test_malformed_body(self, server):
        """Test that a body that is not JSON still gets a bot response."""
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/chat-semantic", data="not json")
            data = await resp.json()

        assert resp.status == 200
        assert data["source"] == "error"
        assert data["confidence"] == 0


class TestChat:
    """Test the website-grounded assistant endpoint."""

    @pytest.mark.asyncio
    async def test_chat(self, server, assistant):
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/chat",
                json={"message": "Who are you?", "companyName": "RED CAT PICTURES"},
            )
            data = await resp.json()

        assert resp.status == 200
        assert data == {"response": "Hello from the studio"}
        request = assistant.answer.call_args[0][0]
        assert request.company_name == "RED CAT PICTURES"

    @pytest.mark.asyncio
    async def test_chat_failure(self, server, assistant):
        """Test that assistant failures are a server error."""
        assistant.answer.side_effect = RuntimeError("quota")

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/chat", json={"message": "Hi", "companyName": "RED CAT PICTURES"}
            )
            data = await resp.json()

        assert resp.status == 500
        assert data == {"error": "Failed to get AI response"}

    @pytest.mark.asyncio
    async def test_chat_not_configured(self, settings, notion, fetcher):
        """Test the assistant endpoint without an AI provider."""
        server = WebServer(
            settings=settings,
            arbitrator=ResponseArbitrator(settings=settings),
            notion=notion,
            fetcher=fetcher,
        )

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/chat", json={"message": "Hi", "companyName": "RED CAT PICTURES"}
            )

        assert resp.status == 500

    @pytest.mark.asyncio
    async def test_chat_bad_request(self, server):
        """Test that a request without a company name is rejected."""
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/chat", json={"message": "Hi"})

        assert resp.status == 400


class TestFetchSection:
    """Test the raw website fetch endpoint."""

    @pytest.mark.asyncio
    async def test_fetch(self, server, fetcher):
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/fetch-section", json={"websiteUrl": "https://redcatpictures.com/"}
            )
            data = await resp.json()

        assert data == {"html": "<html></html>"}
        fetcher.fetch_html.assert_awaited_once_with("https://redcatpictures.com/")

    @pytest.mark.asyncio
    async def test_fetch_failure(self, server, fetcher):
        fetcher.fetch_html.side_effect = RuntimeError("proxy down")

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post(
                "/api/fetch-section", json={"websiteUrl": "https://redcatpictures.com/"}
            )

        assert resp.status == 500


class TestNotionEndpoints:
    """Test the Notion passthrough endpoints."""

    @pytest.mark.asyncio
    async def test_search_faq(self, server, notion):
        notion.search_faq.return_value = [
            FAQEntry(question="Rates?", answer="From Rs 5k", category="Pricing", priority="High")
        ]

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/notion/search-faq", json={"query": "rates"})
            data = await resp.json()

        assert data == {
            "faqs": [
                {"question": "Rates?", "answer": "From Rs 5k", "category": "Pricing", "priority": "High"}
            ]
        }

    @pytest.mark.asyncio
    async def test_search_faq_failure(self, server, notion):
        notion.search_faq.side_effect = RuntimeError("Notion down")

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/notion/search-faq", json={"query": "rates"})
            data = await resp.json()

        assert resp.status == 500
        assert data == {"error": "Failed to search FAQ"}

    @pytest.mark.asyncio
    async def test_company_info(self, server, notion):
        notion.get_company_info.return_value = CompanyInfo(
            category="Hours", information="9-10", chatbot_response="We're open 9 to 10"
        )

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/notion/get-company-info", json={"infoType": "Hours"})
            data = await resp.json()

        assert data == {
            "info": {
                "category": "Hours",
                "information": "9-10",
                "chatbotResponse": "We're open 9 to 10",
            }
        }

    @pytest.mark.asyncio
    async def test_company_info_not_found(self, server):
        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.post("/api/notion/get-company-info", json={"infoType": "Nope"})
            data = await resp.json()

        assert data == {"info": None}

    @pytest.mark.asyncio
    async def test_services(self, server, notion):
        notion.get_services.return_value = [ServiceEntry(name="Weddings", pricing="Rs 50k+")]

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.get("/api/notion/get-services")
            data = await resp.json()

        assert data["services"][0]["name"] == "Weddings"
        assert data["services"][0]["pricing"] == "Rs 50k+"

    @pytest.mark.asyncio
    async def test_notion_not_configured(self, settings, fetcher, assistant):
        server = WebServer(
            settings=settings,
            arbitrator=ResponseArbitrator(settings=settings),
            fetcher=fetcher,
            assistant=assistant,
        )

        async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
            resp = await client.get("/api/notion/get-services")

        assert resp.status == 500


class TestLifecycle:
    """Test server shutdown."""

    @pytest.mark.asyncio
    async def test_stop_closes_clients(self, settings, notion, fetcher, assistant):
        """Test that shutdown closes the fetcher and the LLM provider."""
        provider = MagicMock(spec=LLMProvider)
        provider.aclose = AsyncMock()
        fetcher.aclose = AsyncMock()
        server = WebServer(
            settings=settings,
            arbitrator=ResponseArbitrator(llm_provider=provider, settings=settings),
            notion=notion,
            fetcher=fetcher,
            assistant=assistant,
        )
        runner = MagicMock()
        runner.cleanup = AsyncMock()

        await server.stop(runner)

        runner.cleanup.assert_awaited_once()
        fetcher.aclose.assert_awaited_once()
        provider.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_without_provider(self, server, fetcher):
        """Test shutdown when no AI provider is configured."""
        fetcher.aclose = AsyncMock()
        runner = MagicMock()
        runner.cleanup = AsyncMock()

        await server.stop(runner)

        fetcher.aclose.assert_awaited_once()
