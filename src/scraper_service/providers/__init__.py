"""Fetch providers for different HTTP backends."""

from scraper_service.providers.base import FetchResult, ScraperProvider
from scraper_service.providers.requests_provider import RequestsProvider

__all__ = ["ScraperProvider", "FetchResult", "RequestsProvider"]
