"""Provider initialization for the scraper service."""

from scraper_service.providers import RequestsProvider, ScraperProvider

# Initialize default provider
# This is shared by the HTTP routes and the MCP tools
default_provider: ScraperProvider = RequestsProvider()


def get_provider(url: str) -> ScraperProvider:
    """Get the appropriate provider for a URL.

    Args:
        url: The URL to fetch

    Returns:
        A provider that supports the URL

    Raises:
        ValueError: If no provider supports the URL
    """
    if default_provider.supports_url(url):
        return default_provider

    raise ValueError(f"No provider supports URL: {url}")
