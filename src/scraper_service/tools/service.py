"""Business logic for single-page and batch scraping."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from scraper_service.config import settings
from scraper_service.core.providers import get_provider
from scraper_service.errors import STATUS_ERROR_TYPES, ErrorType, FetchError, classify_error
from scraper_service.metrics import record_batch, record_scrape
from scraper_service.models.scrape import BatchItem, BatchResult, ScrapeRequest, ScrapeResult
from scraper_service.utils import extract_links, reduce_to_text

logger = logging.getLogger(__name__)

BATCH_SEPARATOR = "\n\n"


def describe_error(exc: BaseException) -> str:
    """Human-readable message for a failed scrape."""
    return f"Scrape failed: {str(exc) or type(exc).__name__}"


async def scrape_page(request: ScrapeRequest) -> ScrapeResult:
    """Fetch a page and extract its text and links.

    Every failure (unsupported URL, exhausted retries, non-200 response,
    extraction error) is returned as a result with success=False and an
    error classification instead of being raised.

    Args:
        request: URL to scrape and instructions to echo back

    Returns:
        ScrapeResult with content and links, or with error and error_type
    """
    url = request.url
    logger.info(f"Scraping {url}")

    try:
        provider = get_provider(url)
        fetched = await provider.fetch(url)

        if fetched.status_code != 200 or not fetched.body:
            raise FetchError(
                f"HTTP {fetched.status_code}: {fetched.reason}".rstrip(": "),
                error_type=STATUS_ERROR_TYPES.get(fetched.status_code, ErrorType.UNKNOWN),
                status_code=fetched.status_code,
                attempts=fetched.attempts_used,
            )

        logger.debug(f"Processing HTML from {url}, {len(fetched.body)} chars")
        main_content = reduce_to_text(fetched.body)
        links = extract_links(fetched.body, url)

    except Exception as e:
        error_type = classify_error(e)
        message = describe_error(e)
        logger.warning(f"{message} ({error_type.value}) for {url}")

        record_scrape(
            url=url,
            success=False,
            attempts=getattr(e, "attempts", None),
            error_type=error_type.value,
            error=message,
        )

        return ScrapeResult(
            url=url,
            instructions=request.instructions,
            success=False,
            error=message,
            error_type=error_type,
        )

    logger.info(
        f"Scraped {url}: {len(main_content)} chars, {len(links)} link(s), "
        f"{fetched.attempts_used} attempt(s)"
    )
    record_scrape(
        url=url,
        success=True,
        attempts=fetched.attempts_used,
        elapsed_ms=fetched.elapsed_ms,
    )

    return ScrapeResult(
        url=url,
        instructions=request.instructions,
        success=True,
        main_content=main_content,
        links=links,
        content_length=len(main_content),
        links_found=len(links),
        attempts_used=fetched.attempts_used,
    )


def to_batch_item(result: ScrapeResult) -> BatchItem:
    """Project a single-page result onto a batch entry."""
    if result.success:
        return BatchItem(
            url=result.url,
            success=True,
            instructions=result.instructions,
            main_content=result.main_content,
            content_length=result.content_length,
            links=result.links,
        )
    return BatchItem(
        url=result.url,
        success=False,
        instructions=result.instructions,
        error=result.error,
        error_type=result.error_type,
    )


def combine_content(items: Sequence[BatchItem]) -> str:
    """Join successful contents, each preceded by a URL separator line."""
    return BATCH_SEPARATOR.join(
        f"--- URL: {item.url} ---\n{item.main_content or ''}" for item in items if item.success
    )


async def scrape_batch(
    urls: Sequence[str],
    instructions: str = "",
    main_url: str | None = None,
    max_urls: int = settings.max_batch_urls,
    delay: float = settings.batch_delay,
    item_timeout: float = settings.batch_item_timeout,
) -> BatchResult:
    """Scrape a few URLs one after another.

    URLs beyond max_urls are ignored. Each URL goes through scrape_page,
    bounded by item_timeout; a failure on one URL is recorded in its entry
    and does not stop the batch. The driver sleeps delay seconds between
    URLs, never after the last one.

    The timeout stops waiting for a URL but cannot interrupt a request
    already running in an executor thread; with the default fetch settings
    (2 attempts of up to 30 s plus a 2 s pause) such a request may still be
    in flight while the next URL starts.

    Args:
        urls: URLs to scrape
        instructions: Opaque text echoed back in every entry
        main_url: Optional originating URL, echoed back
        max_urls: Maximum number of URLs processed (default: 3)
        delay: Seconds to wait between URLs (default: 3.0)
        item_timeout: Seconds allowed for each URL (default: 45)

    Returns:
        BatchResult with per-URL entries and combined content
    """
    urls_to_process = list(urls)[:max_urls]
    total = len(urls_to_process)
    record_batch()
    logger.info(f"Processing batch of {total} URL(s) ({len(urls)} submitted)")

    items: list[BatchItem] = []
    for index, url in enumerate(urls_to_process):
        logger.info(f"[{index + 1}/{total}] Processing: {url}")

        try:
            result = await asyncio.wait_for(
                scrape_page(ScrapeRequest(url=url, instructions=instructions)),
                timeout=item_timeout,
            )
            items.append(to_batch_item(result))
        except Exception as e:
            error_type = classify_error(e)
            if error_type is ErrorType.TIMEOUT and not str(e):
                message = f"Scrape failed: timed out after {item_timeout:g}s"
            else:
                message = describe_error(e)
            logger.warning(f"Error on {url}: {message}")
            record_scrape(url=str(url), success=False, error_type=error_type.value, error=message)
            items.append(
                BatchItem(
                    url=str(url),
                    success=False,
                    instructions=instructions,
                    error=message,
                    error_type=error_type,
                )
            )

        # Pause between URLs
        if index < total - 1:
            await asyncio.sleep(delay)

    successful = sum(1 for item in items if item.success)
    combined = combine_content(items)

    logger.info(f"Batch finished: {successful}/{total} successful")

    return BatchResult(
        success=successful > 0,
        instructions=instructions,
        main_url=main_url,
        urls_processed=total,
        successful=successful,
        failed=total - successful,
        combined_content=combined,
        total_content_length=len(combined),
        all_results=items,
    )
