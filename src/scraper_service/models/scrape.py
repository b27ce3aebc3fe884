"""Pydantic models for scrape requests and responses."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scraper_service.errors import ErrorType


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ApiModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a JSON response, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScrapeRequest(ApiModel):
    """Request body for a single-page scrape."""

    url: str = Field(min_length=1, description="Absolute URL of the page to scrape")
    instructions: str = Field(default="", description="Opaque caller text echoed back unchanged")

    @field_validator("instructions", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class BatchRequest(ApiModel):
    """Request body for a batch scrape."""

    urls: list[str] = Field(min_length=1, description="URLs to scrape, only the first few are processed")
    instructions: str = Field(default="", description="Opaque caller text echoed back unchanged")
    main_url: str | None = Field(default=None, alias="main_url", description="Optional originating URL")

    @field_validator("instructions", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ScrapeResult(ApiModel):
    """Outcome of a single-page scrape, successful or not."""

    url: str = Field(description="The URL that was requested")
    instructions: str = Field(default="", description="Echo of the request instructions")
    success: bool = Field(description="Whether the scrape was successful")
    main_content: str | None = Field(default=None, description="Plain-text page content")
    links: list[str] | None = Field(default=None, description="Normalized outbound links")
    content_length: int | None = Field(default=None, description="Length of main_content")
    links_found: int | None = Field(default=None, description="Number of links returned")
    attempts_used: int | None = Field(default=None, description="Fetch attempts used")
    error_type: ErrorType | None = Field(default=None, description="Failure classification")
    error: str | None = Field(default=None, description="Error message if failed")
    timestamp: str = Field(default_factory=utc_timestamp, description="Completion time (UTC)")


class BatchItem(ApiModel):
    """Per-URL entry of a batch scrape."""

    url: str = Field(description="The URL that was requested")
    success: bool = Field(description="Whether the scrape was successful")
    instructions: str = Field(default="", description="Echo of the request instructions")
    main_content: str | None = Field(default=None, description="Plain-text page content")
    content_length: int | None = Field(default=None, description="Length of main_content")
    links: list[str] | None = Field(default=None, description="Normalized outbound links")
    error: str | None = Field(default=None, description="Error message if failed")
    error_type: ErrorType | None = Field(default=None, description="Failure classification")


class BatchResult(ApiModel):
    """Aggregated outcome of a batch scrape."""

    success: bool = Field(description="True if at least one URL succeeded")
    instructions: str = Field(default="", description="Echo of the request instructions")
    main_url: str | None = Field(default=None, description="Echo of the originating URL")
    urls_processed: int = Field(description="Number of URLs processed")
    successful: int = Field(description="Number of successful scrapes")
    failed: int = Field(description="Number of failed scrapes")
    combined_content: str = Field(description="Successful contents joined with URL separators")
    total_content_length: int = Field(description="Length of combined_content")
    all_results: list[BatchItem] = Field(description="Results for each processed URL")


class ErrorResponse(ApiModel):
    """Body returned with 4xx/5xx statuses."""

    success: bool = False
    error: str = Field(description="Error message")
    instructions: str | None = Field(default=None, description="Echo of the request instructions")


class StatusResponse(ApiModel):
    """Body of the root status endpoint."""

    status: str = "online"
    service: str = Field(description="Service name")
    timestamp: str = Field(default_factory=utc_timestamp, description="Current time (UTC)")
