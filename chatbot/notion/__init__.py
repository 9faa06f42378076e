"""Notion integration module."""

from .client import NotionClient
from .parser import CompanyInfo, FAQEntry, NotionPageParser, ServiceEntry

__all__ = [
    "CompanyInfo",
    "FAQEntry",
    "NotionClient",
    "NotionPageParser",
    "ServiceEntry",
]
