"""Pydantic data models for scraping operations and responses.

This module defines the data structures used throughout the service:
- Request bodies (ScrapeRequest, BatchRequest)
- Single-page results (ScrapeResult)
- Batch results (BatchResult, BatchItem)
- Status and error bodies (StatusResponse, ErrorResponse)

All models serialize with camelCase keys on the wire.
"""

from scraper_service.models.scrape import (
    ApiModel,
    BatchItem,
    BatchRequest,
    BatchResult,
    ErrorResponse,
    ScrapeRequest,
    ScrapeResult,
    StatusResponse,
    utc_timestamp,
)

__all__ = [
    "ApiModel",
    # Requests
    "ScrapeRequest",
    "BatchRequest",
    # Results
    "ScrapeResult",
    "BatchItem",
    "BatchResult",
    # Status / errors
    "ErrorResponse",
    "StatusResponse",
    "utc_timestamp",
]
