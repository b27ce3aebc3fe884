"""Core infrastructure shared across the service.

Holds the single provider instance used by both the HTTP routes and the
MCP tools.
"""

from scraper_service.core.providers import (
    default_provider,
    get_provider,
)

__all__ = [
    "default_provider",
    "get_provider",
]
