"""Scraping operations and their MCP tool wrappers.

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- service.py: Single-page scrape, batch driver and result shaping

Both the HTTP routes and the MCP tools call into service.py.
"""

from scraper_service.tools.router import (
    register_scraping_tools,
    scrape_url,
    scrape_urls_batch,
)
from scraper_service.tools.service import (
    combine_content,
    scrape_batch,
    scrape_page,
    to_batch_item,
)

__all__ = [
    # MCP tool functions
    "scrape_url",
    "scrape_urls_batch",
    # Registration functions
    "register_scraping_tools",
    # Service functions
    "scrape_page",
    "scrape_batch",
    "to_batch_item",
    "combine_content",
]
