"""MCP tool definitions for page scraping."""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from scraper_service.models.scrape import ScrapeRequest
from scraper_service.tools.service import scrape_batch, scrape_page


async def scrape_url(url: str, instructions: str = "") -> dict[str, Any]:
    """Scrape a page and return its plain text and up to 10 normalized links.

    Args:
        url: Absolute http:// or https:// URL to scrape
        instructions: Free-form text echoed back in the result

    Returns:
        Scrape result; success is false with error and errorType on failure
    """
    result = await scrape_page(ScrapeRequest(url=url, instructions=instructions))
    return result.to_payload()


async def scrape_urls_batch(
    urls: list[str],
    instructions: str = "",
    main_url: str | None = None,
) -> dict[str, Any]:
    """Scrape up to 3 URLs sequentially with a pause between them.

    Args:
        urls: URLs to scrape; only the first 3 are processed
        instructions: Free-form text echoed back in every entry
        main_url: Optional originating URL echoed back in the result

    Returns:
        Batch result with per-URL entries and combined content
    """
    result = await scrape_batch(urls, instructions=instructions, main_url=main_url)
    return result.to_payload()


def register_scraping_tools(mcp: FastMCP) -> None:
    """Register scraping tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(scrape_url)
    mcp.tool()(scrape_urls_batch)
