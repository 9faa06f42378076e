"""Notion page parser for extracting typed records from database rows."""

from dataclasses import dataclass, field
from typing import Any

from chatbot.query.models import FAQDocument


@dataclass
class FAQEntry:
    """An FAQ row with the fields used for direct lookup."""

    question: str
    answer: str
    category: str = ""
    priority: str = ""
    keywords: list[str] = field(default_factory=list)
    alternative_phrasings: str = ""

    def to_dict(self) -> dict[str, str]:
        """Public shape returned by the FAQ search endpoint."""
        return {
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "priority": self.priority,
        }


@dataclass
class ServiceEntry:
    """A service offered by the studio."""

    name: str
    description: str = ""
    short_desc: str = ""
    pricing: str = ""
    timeline: str = ""
    category: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "shortDesc": self.short_desc,
            "pricing": self.pricing,
            "timeline": self.timeline,
            "category": self.category,
        }


@dataclass
class CompanyInfo:
    """A company information row."""

    category: str
    information: str = ""
    chatbot_response: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category,
            "information": self.information,
            "chatbotResponse": self.chatbot_response,
        }


class NotionPageParser:
    """Maps loosely-typed Notion page properties onto strict records.

    Missing or malformed properties read as empty values; parsing a page
    never fails because a field is absent.
    """

    @staticmethod
    def _property(page: dict[str, Any], name: str) -> dict[str, Any]:
        properties = page.get("properties") or {}
        prop = properties.get(name)
        return prop if isinstance(prop, dict) else {}

    def text(self, page: dict[str, Any], name: str) -> str:
        """Plain text of a title or rich_text property."""
        prop = self._property(page, name)
        for kind in ("title", "rich_text"):
            segments = prop.get(kind)
            if isinstance(segments, list) and segments:
                return "".join(
                    segment.get("plain_text") or ""
                    for segment in segments
                    if isinstance(segment, dict)
                )
        return ""

    def select(self, page: dict[str, Any], name: str) -> str:
        """Name of the selected option of a select property."""
        option = self._property(page, name).get("select")
        if isinstance(option, dict):
            return option.get("name") or ""
        return ""

    def multi_select(self, page: dict[str, Any], name: str) -> list[str]:
        """Names of the selected options of a multi_select property."""
        options = self._property(page, name).get("multi_select")
        if not isinstance(options, list):
            return []
        return [o.get("name") or "" for o in options if isinstance(o, dict)]

    def parse_faq_document(self, page: dict[str, Any]) -> FAQDocument:
        """Parse an FAQ row into the shape the response pipeline scores."""
        return FAQDocument(
            question=self.text(page, "Question"),
            answer=self.text(page, "Answer"),
            category=self.select(page, "Category"),
        )

    def parse_faq_entry(self, page: dict[str, Any]) -> FAQEntry:
        """Parse an FAQ row including its lookup fields."""
        return FAQEntry(
            question=self.text(page, "Question"),
            answer=self.text(page, "Answer"),
            category=self.select(page, "Category"),
            priority=self.select(page, "Priority"),
            keywords=self.multi_select(page, "Keywords"),
            alternative_phrasings=self.text(page, "Alternative Phrasings"),
        )

    def parse_service(self, page: dict[str, Any]) -> ServiceEntry:
        return ServiceEntry(
            name=self.text(page, "Service Name"),
            description=self.text(page, "Detailed Description"),
            short_desc=self.text(page, "Short Description"),
            pricing=self.text(page, "Base Price Range"),
            timeline=self.text(page, "Typical Timeline"),
            category=self.select(page, "Category"),
        )

    def parse_company_info(self, page: dict[str, Any]) -> CompanyInfo:
        return CompanyInfo(
            category=self.text(page, "Info Category"),
            information=self.text(page, "Information"),
            chatbot_response=self.text(page, "Chatbot Response"),
        )


def faq_matches(entry: FAQEntry, query: str) -> bool:
    """Whether an FAQ entry answers a literal lookup query.

    Matches when the question or an alternative phrasing contains the
    query, or when one of the entry's keywords appears in the query.
    """
    term = query.lower()
    keywords = [kw.lower() for kw in entry.keywords if kw]
    return (
        term in entry.question.lower()
        or any(kw in term for kw in keywords)
        or term in entry.alternative_phrasings.lower()
    )
