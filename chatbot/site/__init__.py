"""Website access module."""

from .fetcher import SiteFetcher

__all__ = ["SiteFetcher"]
