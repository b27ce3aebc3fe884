"""HTTP routes for status, single-page and batch scraping."""

from __future__ import annotations

import json
import logging
from typing import Any

import pydantic
from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from scraper_service.config import settings
from scraper_service.errors import PayloadTooLargeError, ValidationError
from scraper_service.models.scrape import BatchRequest, ErrorResponse, ScrapeRequest, StatusResponse
from scraper_service.tools.service import scrape_batch, scrape_page

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int, instructions: str | None = None) -> JSONResponse:
    """Build a JSON error body with success=False."""
    body = ErrorResponse(error=message, instructions=instructions)
    return JSONResponse(body.to_payload(), status_code=status_code)


async def read_json_body(request: Request, max_bytes: int | None = None) -> Any:
    """Read and decode a JSON request body.

    Args:
        request: Incoming request
        max_bytes: Maximum accepted body size in bytes (default: settings.max_body_bytes)

    Returns:
        Decoded JSON value, or an empty dict for an empty body

    Raises:
        PayloadTooLargeError: If the body exceeds max_bytes
        ValidationError: If the body is not valid JSON
    """
    if max_bytes is None:
        max_bytes = settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(f"Request body exceeds {max_bytes} bytes")

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise PayloadTooLargeError(f"Request body exceeds {max_bytes} bytes")
        chunks.append(chunk)

    body = b"".join(chunks)
    if not body:
        return {}

    try:
        return json.loads(body)
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e


def parse_scrape_request(body: Any) -> ScrapeRequest:
    """Validate a /scrape body.

    Raises:
        ValidationError: If url is missing or a field has the wrong type
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    if not body.get("url"):
        raise ValidationError("URL is required")

    try:
        return ScrapeRequest.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid request: {e.errors()[0]['msg']}") from e


def parse_batch_request(body: Any) -> BatchRequest:
    """Validate a /scrape-batch body.

    Raises:
        ValidationError: If urls is missing, empty or not a list of strings
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    urls = body.get("urls")
    if not isinstance(urls, list) or not urls:
        raise ValidationError("An array of URLs is required")

    try:
        return BatchRequest.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid request: {e.errors()[0]['msg']}") from e


def _instructions_of(body: Any) -> str:
    if isinstance(body, dict) and isinstance(body.get("instructions"), str):
        return body["instructions"]
    return ""


async def service_status(request: Request) -> JSONResponse:
    """Report that the service is online.

    Returns:
        JSONResponse with status, service name and timestamp
    """
    return JSONResponse(StatusResponse(service=settings.service_name).to_payload())


async def scrape_endpoint(request: Request) -> JSONResponse:
    """Scrape a single page.

    Scraping failures are reported with status 200 and success=false;
    only invalid input (400/413) and unexpected errors (500) change the status.

    Returns:
        JSONResponse with the scrape result
    """
    try:
        scrape_request = parse_scrape_request(await read_json_body(request))
    except PayloadTooLargeError as e:
        return error_response(str(e), 413)
    except ValidationError as e:
        return error_response(str(e), 400)

    try:
        result = await scrape_page(scrape_request)
    except Exception:
        logger.exception(f"Unhandled error while scraping {scrape_request.url}")
        return error_response("Internal server error", 500)

    return JSONResponse(result.to_payload())


async def scrape_batch_endpoint(request: Request) -> JSONResponse:
    """Scrape up to a few URLs sequentially.

    Returns:
        JSONResponse with the batch result
    """
    body: Any = None
    try:
        body = await read_json_body(request)
        batch_request = parse_batch_request(body)
    except PayloadTooLargeError as e:
        return error_response(str(e), 413)
    except ValidationError as e:
        return error_response(str(e), 400, instructions=_instructions_of(body))

    try:
        result = await scrape_batch(
            batch_request.urls,
            instructions=batch_request.instructions,
            main_url=batch_request.main_url,
        )
    except Exception:
        logger.exception("Unhandled error while processing batch")
        return error_response("Batch processing failed", 500, instructions=batch_request.instructions)

    return JSONResponse(result.to_payload())


def register_api_routes(mcp: FastMCP) -> None:
    """Register the scraping HTTP routes on the server.

    Args:
        mcp: FastMCP server instance to register routes on
    """
    mcp.custom_route("/", methods=["GET"])(service_status)
    mcp.custom_route("/scrape", methods=["POST"])(scrape_endpoint)
    mcp.custom_route("/scrape-batch", methods=["POST"])(scrape_batch_endpoint)
