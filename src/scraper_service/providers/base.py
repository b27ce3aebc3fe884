"""Base provider interface for page fetching."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class FetchResult:
    """Result from a single page fetch."""

    url: str
    status_code: int
    body: str
    attempts_used: int
    reason: str = ""
    content_type: str | None = None
    elapsed_ms: float | None = None


class ScraperProvider(ABC):
    """Abstract base class for fetch providers."""

    @abstractmethod
    async def fetch(self, url: str, **kwargs: Any) -> FetchResult:
        """Fetch a page.

        Args:
            url: The URL to fetch
            **kwargs: Additional provider-specific options

        Returns:
            FetchResult with the response body and attempt count

        Raises:
            FetchError: If every attempt failed
        """

    @abstractmethod
    def supports_url(self, url: str) -> bool:
        """Check if this provider supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if this provider can handle the URL
        """
