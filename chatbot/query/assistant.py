"""Direct AI assistant grounded on a section of the studio website."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from chatbot.llm.base import LLMProvider
from chatbot.site import SiteFetcher

logger = logging.getLogger(__name__)

ASSISTANT_MAX_TOKENS = 500


class SiteContact(BaseModel):
    phone: str = ""
    email: str = ""
    address: str = ""
    hours: str = ""


class SiteChatRequest(BaseModel):
    """Body of a direct assistant request."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    section: str | None = None
    section_url: str | None = Field(default=None, alias="sectionUrl")
    company_name: str = Field(alias="companyName")
    contact_info: SiteContact = Field(default_factory=SiteContact, alias="contactInfo")


class SiteAssistant:
    """Answers questions with the company's contact details and website text."""

    def __init__(self, llm_provider: LLMProvider, fetcher: SiteFetcher):
        self.llm_provider = llm_provider
        self.fetcher = fetcher

    def build_prompt(self, request: SiteChatRequest, website_context: str) -> str:
        contact = request.contact_info
        website_info = (
            f"Website Information about {request.section}:\n{website_context}\n\n"
            if website_context
            else ""
        )

        system_prompt = f"""You are an AI assistant for {request.company_name}, a professional photography company in India.

Contact Information:
- Phone: {contact.phone}
- Email: {contact.email}
- Address: {contact.address}
- Hours: {contact.hours}

{website_info}Instructions:
- Provide helpful, accurate, and friendly responses
- Use information from the website context when available
- Keep responses concise (2-4 sentences)
- Format responses with HTML tags like <strong>, <br>, <a href="...">
- For pricing, list packages with prices clearly
- For team/founder questions, use website information
- Always be professional and enthusiastic about photography"""

        return f"{system_prompt}\n\nUser Question: {request.message}\n\nProvide a helpful response:"

    async def answer(self, request: SiteChatRequest) -> str:
        """Generate an answer.

        Website context is best effort; the AI call is not.

        Raises:
            RuntimeError: If the provider fails or returns no text
        """
        website_context = ""
        if request.section and request.section_url:
            website_context = await self.fetcher.fetch_section_text(request.section)
            logger.info(f"Website context for '{request.section}': {len(website_context)} chars")

        result = await self.llm_provider.generate_response(
            self.build_prompt(request, website_context),
            max_tokens=ASSISTANT_MAX_TOKENS,
        )
        if not result.has_text:
            raise RuntimeError(f"AI returned no answer: {result.error}")
        return result.content
