"""Integration tests for the HTTP routes."""

from __future__ import annotations

from functools import partial
from unittest.mock import AsyncMock, Mock, patch

import pytest
from starlette.testclient import TestClient

from conftest import links_page
from scraper_service.api.router import read_json_body
from scraper_service.config import Settings, settings
from scraper_service.errors import ErrorType, FetchError, PayloadTooLargeError
from scraper_service.providers import FetchResult
from scraper_service.server import create_app
from scraper_service.tools.service import scrape_batch

GET_PROVIDER = "scraper_service.tools.service.get_provider"


@pytest.fixture
def client() -> TestClient:
    """Test client for the full application."""
    return TestClient(create_app(), raise_server_exceptions=False)


def provider_returning(*outcomes: FetchResult | Exception) -> Mock:
    provider = Mock()
    provider.fetch = AsyncMock(side_effect=list(outcomes))
    return provider


def page(url: str, body: str) -> FetchResult:
    return FetchResult(url=url, status_code=200, body=body, attempts_used=1, reason="OK")


class TestStatusRoutes:
    """Tests for status, health and stats routes."""

    def test_root_status(self, client: TestClient) -> None:
        """Test the online status payload."""
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "online"
        assert body["service"] == settings.service_name
        assert body["timestamp"].endswith("Z")

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_stats(self, client: TestClient) -> None:
        """Test that stats reflect scrapes made through the API."""
        provider = provider_returning(page("https://example.com", "<p>hi</p>"))

        with patch(GET_PROVIDER, return_value=provider):
            client.post("/scrape", json={"url": "https://example.com"})

        stats = client.get("/api/stats").json()
        assert stats["scrapes"]["total"] == 1
        assert stats["scrapes"]["successful"] == 1
        assert stats["recent_scrapes"][0]["url"] == "https://example.com"

    def test_config(self, client: TestClient) -> None:
        config = client.get("/api/config").json()

        assert config["config"]["port"] == settings.port
        assert config["config"]["max_batch_urls"] == settings.max_batch_urls
        assert config["user_agents"] == 3

    def test_cors_all_origins(self, client: TestClient) -> None:
        """Test that any origin is allowed."""
        response = client.get("/", headers={"Origin": "https://frontend.example"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/scrape",
            headers={
                "Origin": "https://frontend.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestScrapeRoute:
    """Tests for POST /scrape."""

    def test_missing_url(self, client: TestClient) -> None:
        """Test that a body without url is rejected with 400."""
        response = client.post("/scrape", json={"instructions": "anything"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "URL is required"

    def test_empty_body(self, client: TestClient) -> None:
        response = client.post("/scrape")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_invalid_json(self, client: TestClient) -> None:
        response = client.post("/scrape", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["error"] == "Request body must be valid JSON"

    def test_non_object_body(self, client: TestClient) -> None:
        response = client.post("/scrape", json=["https://example.com"])

        assert response.status_code == 400

    def test_body_too_large(self, client: TestClient) -> None:
        """Test the request body size limit."""
        with patch("scraper_service.api.router.settings", Settings(max_body_bytes=64)):
            response = client.post("/scrape", json={"url": "https://example.com", "instructions": "x" * 100})

        assert response.status_code == 413
        assert response.json()["success"] is False

    def test_chunked_body_too_large(self, client: TestClient) -> None:
        """Test the size limit on a body sent without Content-Length."""
        chunks = [b'{"url": "https://example.com", "instructions": "', b"x" * 100, b'"}']

        with patch("scraper_service.api.router.settings", Settings(max_body_bytes=64)):
            response = client.post("/scrape", content=iter(chunks), headers={"Content-Type": "application/json"})

        assert response.status_code == 413

    def test_success_payload(self, client: TestClient) -> None:
        """Test the camelCase success payload."""
        provider = provider_returning(page("https://example.com/", links_page(12)))

        with patch(GET_PROVIDER, return_value=provider):
            response = client.post("/scrape", json={"url": "https://example.com/", "instructions": "list pages"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["url"] == "https://example.com/"
        assert body["instructions"] == "list pages"
        assert body["mainContent"].startswith("Listing")
        assert body["contentLength"] == len(body["mainContent"])
        assert len(body["links"]) == 10
        assert body["linksFound"] == 10
        assert body["attemptsUsed"] == 1
        assert "errorType" not in body
        assert "error" not in body

    def test_instructions_default_empty(self, client: TestClient) -> None:
        provider = provider_returning(page("https://example.com", "<p>x</p>"))

        with patch(GET_PROVIDER, return_value=provider):
            body = client.post("/scrape", json={"url": "https://example.com", "instructions": None}).json()

        assert body["instructions"] == ""

    def test_scrape_failure_is_200(self, client: TestClient) -> None:
        """Test that fetch failures come back as 200 with success=false."""
        provider = provider_returning(FetchError("403 Client Error: Forbidden", error_type=ErrorType.BLOCKED, status_code=403))

        with patch(GET_PROVIDER, return_value=provider):
            response = client.post("/scrape", json={"url": "https://example.com", "instructions": "keep"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["errorType"] == "blocked"
        assert body["error"] == "Scrape failed: 403 Client Error: Forbidden"
        assert body["instructions"] == "keep"
        assert "attemptsUsed" not in body
        assert "mainContent" not in body

    def test_unhandled_error_is_500(self, client: TestClient) -> None:
        """Test that unexpected exceptions give a generic 500."""
        with patch("scraper_service.api.router.scrape_page", AsyncMock(side_effect=RuntimeError("secret detail"))):
            response = client.post("/scrape", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}


class TestScrapeBatchRoute:
    """Tests for POST /scrape-batch."""

    @pytest.mark.parametrize(
        "body",
        [{}, {"urls": []}, {"urls": "https://example.com"}, {"urls": None}],
    )
    def test_invalid_urls(self, client: TestClient, body: dict) -> None:
        """Test that urls must be a non-empty list."""
        response = client.post("/scrape-batch", json=body)

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_invalid_urls_echo_instructions(self, client: TestClient) -> None:
        response = client.post("/scrape-batch", json={"urls": [], "instructions": "echo"})

        assert response.json()["instructions"] == "echo"

    def test_five_urls_processes_three(self, client: TestClient) -> None:
        """Test that only the first three URLs are scraped."""
        urls = [f"https://example.com/{i}" for i in range(5)]
        provider = provider_returning(
            page(urls[0], "<p>Zero</p>"),
            FetchError("timed out", error_type=ErrorType.TIMEOUT),
            page(urls[2], "<p>Two</p>"),
        )

        with patch(GET_PROVIDER, return_value=provider):
            with patch("scraper_service.api.router.scrape_batch", partial(scrape_batch, delay=0)):
                response = client.post(
                    "/scrape-batch",
                    json={"urls": urls, "instructions": "merge", "main_url": "https://example.com"},
                )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["urlsProcessed"] == 3
        assert body["successful"] + body["failed"] == 3
        assert body["successful"] == 2
        assert body["instructions"] == "merge"
        assert body["mainUrl"] == "https://example.com"
        assert [item["url"] for item in body["allResults"]] == urls[:3]
        assert body["allResults"][1]["errorType"] == "timeout"
        assert body["combinedContent"] == (
            "--- URL: https://example.com/0 ---\nZero\n\n--- URL: https://example.com/2 ---\nTwo"
        )
        assert body["totalContentLength"] == len(body["combinedContent"])

    def test_top_level_failure_is_500(self, client: TestClient) -> None:
        """Test that a batch-level exception gives 500 and echoes instructions."""
        with patch("scraper_service.api.router.scrape_batch", AsyncMock(side_effect=RuntimeError("boom"))):
            response = client.post("/scrape-batch", json={"urls": ["https://example.com"], "instructions": "echo"})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["instructions"] == "echo"
        assert "boom" not in body["error"]


class TestReadJsonBody:
    """Tests for read_json_body."""

    @pytest.mark.asyncio
    async def test_stops_reading_past_limit(self) -> None:
        """Test that the stream is abandoned as soon as the limit is passed."""
        consumed: list[bytes] = []

        async def stream():
            for chunk in (b"a" * 40, b"b" * 40, b"c" * 40, b"d" * 40):
                consumed.append(chunk)
                yield chunk

        request = Mock()
        request.headers = {}
        request.stream = stream

        with pytest.raises(PayloadTooLargeError):
            await read_json_body(request, max_bytes=64)

        assert len(consumed) == 2

    @pytest.mark.asyncio
    async def test_chunks_joined(self) -> None:
        async def stream():
            yield b'{"url": '
            yield b'"https://example.com"}'

        request = Mock()
        request.headers = {}
        request.stream = stream

        assert await read_json_body(request, max_bytes=64) == {"url": "https://example.com"}
