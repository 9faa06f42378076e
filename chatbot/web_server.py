"""Web server exposing the chatbot endpoints used by the studio website."""

import logging
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from chatbot.config import Settings, get_settings
from chatbot.notion import NotionClient
from chatbot.query import ResponseArbitrator
from chatbot.query.assistant import SiteAssistant, SiteChatRequest
from chatbot.query.models import ChatRequest
from chatbot.query.processor import error_response
from chatbot.site import SiteFetcher

logger = logging.getLogger(__name__)


class WebServer:
    """HTTP server for the chat widget and the Notion passthrough endpoints."""

    def __init__(
        self,
        settings: Settings | None = None,
        arbitrator: ResponseArbitrator | None = None,
        notion: NotionClient | None = None,
        fetcher: SiteFetcher | None = None,
        assistant: SiteAssistant | None = None,
    ):
        """Initialize web server.

        Collaborators not passed in are built from settings; the Notion
        client and the site assistant stay None when their credentials are
        missing.
        """
        self.settings = settings or get_settings()
        self.port = self.settings.port
        self.arbitrator = arbitrator or ResponseArbitrator.from_settings(self.settings)
        self.fetcher = fetcher or SiteFetcher(settings=self.settings)

        if notion is None and self.settings.notion_api_key:
            notion = NotionClient(settings=self.settings)
        self.notion = notion

        if assistant is None and self.arbitrator.llm_provider is not None:
            assistant = SiteAssistant(self.arbitrator.llm_provider, self.fetcher)
        self.assistant = assistant

        self.app = web.Application()
        self._setup_routes()
        logger.info(f"Web server initialized on port {self.port}")

    def _setup_routes(self):
        """Set up HTTP routes."""
        self.app.router.add_get("/", self._handle_health)
        self.app.router.add_get("/health", self._handle_health)
        self.app.router.add_post("/api/chat-semantic", self._handle_chat_semantic)
        self.app.router.add_post("/api/chat", self._handle_chat)
        self.app.router.add_post("/api/fetch-section", self._handle_fetch_section)
        self.app.router.add_post("/api/notion/search-faq", self._handle_search_faq)
        self.app.router.add_post("/api/notion/get-company-info", self._handle_company_info)
        self.app.router.add_get("/api/notion/get-services", self._handle_services)
        logger.info("Routes configured: /, /health, /api/chat-semantic, /api/chat, ...")

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response(
            {
                "status": "healthy",
                "service": "Studio Chatbot",
                "knowledge_base": self.arbitrator.knowledge_base is not None,
                "ai": self.arbitrator.llm_provider is not None,
            }
        )

    async def _handle_chat_semantic(self, request: web.Request) -> web.Response:
        """
        Answer a chat widget message.

        Expects JSON: {"message": "...", "conversationHistory": [...]}
        Always answers 200 with a bot response, including for bad input.
        """
        try:
            data = await request.json()
            body = ChatRequest.model_validate(data if isinstance(data, dict) else {})
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid chat request body: {e}")
            return web.json_response(error_response(str(e)).to_json())

        response = await self.arbitrator.respond(body.message, body.conversation_history)
        return web.json_response(response.to_json())

    async def _handle_chat(self, request: web.Request) -> web.Response:
        """
        Answer with the website-grounded assistant.

        Expects JSON: {"message", "section"?, "sectionUrl"?, "companyName", "contactInfo"}
        """
        try:
            body = SiteChatRequest.model_validate(await request.json())
        except (ValueError, ValidationError) as e:
            return _error(f"Invalid request: {e}", status=400)

        if self.assistant is None:
            return _error("AI provider not configured")

        try:
            answer = await self.assistant.answer(body)
        except Exception as e:
            logger.error(f"AI assistant error: {e}", exc_info=True)
            return _error("Failed to get AI response")
        return web.json_response({"response": answer})

    async def _handle_fetch_section(self, request: web.Request) -> web.Response:
        """Return raw website HTML. Expects JSON: {"websiteUrl": "..."}"""
        data = await _json_body(request)
        website_url = data.get("websiteUrl")
        if not isinstance(website_url, str) or not website_url.strip():
            return _error("No websiteUrl provided", status=400)

        try:
            html = await self.fetcher.fetch_html(website_url.strip())
        except RuntimeError as e:
            logger.error(f"Fetch section error: {e}")
            return _error("Failed to fetch website section")
        return web.json_response({"html": html})

    async def _handle_search_faq(self, request: web.Request) -> web.Response:
        """Literal FAQ lookup. Expects JSON: {"query": "..."}"""
        data = await _json_body(request)
        query = data.get("query")
        if not isinstance(query, str) or not query.strip():
            return _error("No query provided", status=400)
        if self.notion is None:
            return _error("Notion not configured")

        try:
            entries = await self.notion.search_faq(query.strip())
        except Exception as e:
            logger.error(f"Notion FAQ search error: {e}", exc_info=True)
            return _error("Failed to search FAQ")
        return web.json_response({"faqs": [entry.to_dict() for entry in entries]})

    async def _handle_company_info(self, request: web.Request) -> web.Response:
        """Company info by category type. Expects JSON: {"infoType": "..."}"""
        data = await _json_body(request)
        info_type = data.get("infoType")
        if not isinstance(info_type, str) or not info_type:
            return _error("No infoType provided", status=400)
        if self.notion is None:
            return _error("Notion not configured")

        try:
            info = await self.notion.get_company_info(info_type)
        except Exception as e:
            logger.error(f"Notion company info error: {e}", exc_info=True)
            return _error("Failed to get company info")
        return web.json_response({"info": info.to_dict() if info else None})

    async def _handle_services(self, request: web.Request) -> web.Response:
        """Active services."""
        if self.notion is None:
            return _error("Notion not configured")

        try:
            services = await self.notion.get_services()
        except Exception as e:
            logger.error(f"Notion services error: {e}", exc_info=True)
            return _error("Failed to get services")
        return web.json_response({"services": [service.to_dict() for service in services]})

    async def start(self):
        """Start the web server."""
        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, self.settings.host, self.port)
        await site.start()
        logger.info(f"Web server started on {self.settings.host}:{self.port}")
        return runner

    async def stop(self, runner):
        """Stop the web server."""
        await runner.cleanup()
        await self.fetcher.aclose()
        if self.arbitrator.llm_provider is not None:
            await self.arbitrator.llm_provider.aclose()
        logger.info("Web server stopped")


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _error(message: str, status: int = 500) -> web.Response:
    return web.json_response({"error": message}, status=status)
