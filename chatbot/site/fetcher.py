"""Fetch the studio website through a raw-HTML proxy."""

import logging
import re
from urllib.parse import quote

import httpx

from chatbot.config import Settings, get_settings

logger = logging.getLogger(__name__)

MAX_SECTION_CHARS = 2000


class SiteFetcher:
    """Fetches website HTML and pulls text out of page sections."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ):
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    def proxy_url(self, url: str) -> str:
        return self.settings.site_proxy_url + quote(url, safe="!'()*")

    async def fetch_html(self, url: str) -> str:
        """Fetch raw HTML for a URL via the proxy.

        Raises:
            RuntimeError: If the request fails or returns an error status
        """
        try:
            response = await self.client.get(self.proxy_url(url))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Website fetch HTTP error: {e.response.status_code} for {url}")
            raise RuntimeError(f"Failed to fetch {url}: {e}")
        except httpx.RequestError as e:
            logger.error(f"Website fetch failed for {url}: {e}")
            raise RuntimeError(f"Failed to fetch {url}: {e}")
        return response.text

    @staticmethod
    def extract_section(html: str, section: str) -> str:
        """Text of the first element whose id is the section name.

        Tags are stripped, whitespace collapsed and the text capped at
        MAX_SECTION_CHARS. Returns "" when the section is not found.
        """
        pattern = re.compile(
            rf'<[^>]+id="{re.escape(section)}"[^>]*>([\s\S]*?)</[^>]+>',
            re.IGNORECASE,
        )
        match = pattern.search(html)
        if not match:
            return ""

        text = re.sub(r"<[^>]+>", " ", match.group(1))
        text = re.sub(r"\s+", " ", text).strip()
        return text[:MAX_SECTION_CHARS]

    async def fetch_section_text(self, section: str) -> str:
        """Section text from the configured website, or "" on any failure."""
        try:
            html = await self.fetch_html(self.settings.site_url)
        except RuntimeError as e:
            logger.error(f"Error fetching website context: {e}")
            return ""
        return self.extract_section(html, section)

    async def aclose(self) -> None:
        await self.client.aclose()
