"""Exception types and error classification for scraping operations."""

from __future__ import annotations

import asyncio
from enum import Enum

import requests


class ErrorType(str, Enum):
    """Classification attached to failed scrape results."""

    TIMEOUT = "timeout"
    BLOCKED = "blocked"
    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNKNOWN = "unknown"


# HTTP status codes with a dedicated classification
STATUS_ERROR_TYPES: dict[int, ErrorType] = {
    403: ErrorType.BLOCKED,
    429: ErrorType.RATE_LIMIT,
    503: ErrorType.SERVICE_UNAVAILABLE,
}


class ScraperError(Exception):
    """Base class for all service errors."""


class ValidationError(ScraperError):
    """Raised when a request body is missing required fields or is malformed."""


class PayloadTooLargeError(ValidationError):
    """Raised when a request body exceeds the configured size limit."""


class FetchError(ScraperError):
    """Raised when a page could not be fetched.

    Attributes:
        error_type: Classification of the failure
        status_code: HTTP status of the last response, if one was received
        attempts: Number of attempts made before giving up
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.UNKNOWN,
        status_code: int | None = None,
        attempts: int | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.status_code = status_code
        self.attempts = attempts


def status_code_of(exc: BaseException) -> int | None:
    """Return the HTTP status attached to a requests exception, if any."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def classify_error(exc: BaseException) -> ErrorType:
    """Map an exception raised while scraping to an ErrorType.

    Args:
        exc: The exception to classify

    Returns:
        The matching ErrorType, UNKNOWN when nothing more specific applies
    """
    if isinstance(exc, FetchError):
        return exc.error_type

    if isinstance(exc, (requests.Timeout, asyncio.TimeoutError, TimeoutError)):
        return ErrorType.TIMEOUT

    status = status_code_of(exc)
    if status is not None:
        return STATUS_ERROR_TYPES.get(status, ErrorType.UNKNOWN)

    return ErrorType.UNKNOWN
