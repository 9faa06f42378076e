"""Notion client for reading the studio's FAQ, services and company databases."""

import logging
from typing import Any

from notion_client import AsyncClient
from notion_client.helpers import async_collect_paginated_api

from chatbot.config import Settings, get_settings
from chatbot.query.models import FAQDocument
from .parser import CompanyInfo, FAQEntry, NotionPageParser, ServiceEntry, faq_matches

logger = logging.getLogger(__name__)

ACTIVE_STATUS_FILTER = {"property": "Status", "select": {"equals": "Active"}}
ACTIVE_CHECKBOX_FILTER = {"property": "Active", "checkbox": {"equals": True}}


class NotionClient:
    """Client for the Notion databases behind the website chatbot."""

    def __init__(
        self,
        api_key: str | None = None,
        settings: Settings | None = None,
        client: AsyncClient | None = None,
    ):
        """Initialize the Notion client.

        Args:
            api_key: Notion integration token, defaults to settings.notion_api_key
            settings: Settings holding the database IDs
            client: Preconfigured notion_client.AsyncClient
        """
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.notion_api_key
        self.client = client or AsyncClient(auth=self.api_key)
        self.parser = NotionPageParser()

    async def query_database(
        self,
        database_id: str | None,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch every page of a database query.

        Raises:
            ValueError: If the database ID is not configured
            RuntimeError: If the Notion API request fails
        """
        if not database_id:
            raise ValueError("Notion database ID is not configured")

        kwargs: dict[str, Any] = {"database_id": database_id}
        if filter:
            kwargs["filter"] = filter

        logger.info(f"Querying Notion database: {database_id}")
        try:
            return await async_collect_paginated_api(self.client.databases.query, **kwargs)
        except Exception as e:
            raise RuntimeError(f"Failed to query Notion database {database_id}: {e}")

    async def get_faq_documents(self) -> list[FAQDocument]:
        """FAQ entries for the response pipeline.

        A page that cannot be parsed becomes an empty document, which the
        search drops.
        """
        filter = ACTIVE_STATUS_FILTER if self.settings.notion_faq_active_only else None
        pages = await self.query_database(self.settings.notion_faq_database_id, filter)

        documents = []
        for page in pages:
            try:
                documents.append(self.parser.parse_faq_document(page))
            except (AttributeError, TypeError) as e:
                logger.error(f"Error processing FAQ page {page.get('id')}: {e}")
                documents.append(FAQDocument(question="", answer=""))
        return documents

    async def search_faq(self, query: str) -> list[FAQEntry]:
        """Active FAQ entries that literally match the query."""
        pages = await self.query_database(
            self.settings.notion_faq_database_id, ACTIVE_STATUS_FILTER
        )
        entries = [self.parser.parse_faq_entry(page) for page in pages]
        return [entry for entry in entries if faq_matches(entry, query)]

    async def get_services(self) -> list[ServiceEntry]:
        """Services marked active."""
        pages = await self.query_database(
            self.settings.notion_services_database_id, ACTIVE_CHECKBOX_FILTER
        )
        return [self.parser.parse_service(page) for page in pages]

    async def get_company_info(self, info_type: str) -> CompanyInfo | None:
        """First company info row of the given category type, if any."""
        pages = await self.query_database(
            self.settings.notion_company_info_database_id,
            {"property": "Category Type", "select": {"equals": info_type}},
        )
        if not pages:
            return None
        return self.parser.parse_company_info(pages[0])

    async def health_check(self) -> bool:
        """Check if the integration token is accepted by Notion."""
        try:
            await self.client.users.me()
            return True
        except Exception as e:
            logger.warning(f"Notion health check failed: {e}")
            return False
