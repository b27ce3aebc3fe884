"""Page fetcher built on the requests library with browser-like headers and retries."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlparse

import requests

from scraper_service.config import DEFAULT_HEADERS, USER_AGENTS, settings
from scraper_service.errors import FetchError, classify_error, status_code_of
from scraper_service.providers.base import FetchResult, ScraperProvider

# Configure logging
logger = logging.getLogger(__name__)


class RequestsProvider(ScraperProvider):
    """Fetcher using a fresh requests session per attempt, a rotating User-Agent and linear backoff.

    Bodies whose Content-Type names no charset are decoded as UTF-8.
    """

    def __init__(
        self,
        timeout: float = settings.request_timeout,
        max_attempts: int = settings.max_attempts,
        retry_delay: float = settings.retry_delay,
        max_redirects: int = settings.max_redirects,
        user_agents: Sequence[str] = USER_AGENTS,
    ) -> None:
        """Initialize the requests provider.

        Args:
            timeout: Per-attempt timeout in seconds (default: 30)
            max_attempts: Total number of attempts, including the first (default: 2)
            retry_delay: Base delay in seconds, multiplied by the attempt number (default: 2.0)
            max_redirects: Maximum redirects followed per attempt (default: 5)
            user_agents: Pool of User-Agent strings, one picked per fetch
        """
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.user_agents = tuple(user_agents)
        self.max_redirects = max_redirects

    def supports_url(self, url: str) -> bool:
        """Check if this provider supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if the URL uses http or https scheme and has a host
        """
        try:
            parsed = urlparse(url)
            return parsed.scheme in ("http", "https") and bool(parsed.netloc)
        except ValueError:
            return False

    def new_session(self) -> requests.Session:
        """Open a session with no cookies, following at most max_redirects redirects."""
        session = requests.Session()
        session.max_redirects = self.max_redirects
        return session

    def _get(self, url: str, headers: dict[str, str], timeout: float) -> requests.Response:
        # Cookies set along a redirect chain live only as long as this call
        with self.new_session() as session:
            response = session.get(url, headers=headers, timeout=timeout, allow_redirects=True)

        if response.encoding is None or "charset=" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response

    def build_headers(self) -> dict[str, str]:
        """Return the browser header set with a randomly chosen User-Agent."""
        headers = dict(DEFAULT_HEADERS)
        headers["User-Agent"] = random.choice(self.user_agents)
        return headers

    async def fetch(self, url: str, **kwargs: Any) -> FetchResult:
        """Fetch a URL, retrying failed attempts with a linearly growing delay.

        Any final status in [200, 400) counts as a response; 4xx and 5xx
        statuses fail the attempt.

        Args:
            url: The URL to fetch
            **kwargs: Additional options
                - timeout: Per-attempt timeout in seconds
                - max_attempts: Total number of attempts

        Returns:
            FetchResult with the response body and the number of attempts used

        Raises:
            FetchError: If the last attempt failed, chained from the requests error
        """
        timeout = kwargs.get("timeout", self.timeout)
        max_attempts = kwargs.get("max_attempts", self.max_attempts)
        headers = self.build_headers()

        attempt = 0
        while True:
            attempt += 1
            logger.debug(f"Fetch attempt {attempt}/{max_attempts} for {url}")

            try:
                # Run requests in thread pool to avoid blocking
                loop = asyncio.get_running_loop()
                started = time.perf_counter()
                response = await loop.run_in_executor(
                    None,
                    lambda: self._get(url, headers, timeout),
                )
                elapsed_ms = (time.perf_counter() - started) * 1000

                # Raise for 4xx/5xx
                response.raise_for_status()

                logger.debug(f"Fetched {url} with status {response.status_code} in {elapsed_ms:.0f}ms")

                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    body=response.text or "",
                    attempts_used=attempt,
                    reason=response.reason or "",
                    content_type=response.headers.get("Content-Type"),
                    elapsed_ms=elapsed_ms,
                )

            except requests.RequestException as e:
                logger.warning(f"Attempt {attempt}/{max_attempts} failed for {url}: {e}")

                if attempt >= max_attempts:
                    raise FetchError(
                        str(e),
                        error_type=classify_error(e),
                        status_code=status_code_of(e),
                        attempts=attempt,
                    ) from e

                delay = self.retry_delay * attempt
                logger.debug(f"Retrying {url} in {delay:.1f}s")
                await asyncio.sleep(delay)
