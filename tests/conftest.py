"""Pytest configuration and fixtures for scraper-service tests."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from scraper_service.metrics import reset_metrics


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Start every test with empty metrics."""
    return reset_metrics()


@pytest.fixture
def sample_html() -> str:
    """Page mixing text with every kind of non-text element."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="A sample page for testing">
        <title>Test Page Title</title>
        <link rel="stylesheet" href="/static/site.css">
        <script>console.log('should be stripped');</script>
        <style>.test { color: red; }</style>
    </head>
    <body>
        <h1>Main Heading</h1>
        <p>This is a <strong>sample</strong> paragraph with <em>formatting</em>.</p>
        <img src="/images/logo.png" alt="Logo">
        <video controls><source src="/media/clip.mp4" type="video/mp4">Video fallback text</video>
        <audio><track src="/media/captions.vtt">Audio fallback text</audio>
        <iframe src="https://embed.example.com/frame">Iframe fallback text</iframe>
        <object data="/movie.swf">Object fallback text</object>
        <embed src="/plugin.swf">
        <canvas>Canvas fallback text</canvas>
        <svg><text>SVG text</text></svg>
        <picture><source srcset="/hero.webp">Picture fallback text</picture>
        <template><p>Template text</p></template>
        <ul>
            <li><a href="https://example.com/about">About</a></li>
            <li><a href="/relative" title="Relative Link">Relative</a></li>
            <li><a href="#anchor">Anchor Link</a></li>
        </ul>
        <div>
            <p>Another paragraph with some text.</p>
        </div>
        <noscript>No JavaScript content</noscript>
    </body>
    </html>
    """


@pytest.fixture
def simple_html() -> str:
    """Simple HTML for basic testing."""
    return """
    <html>
    <head><title>Simple Page</title></head>
    <body>
        <h1>Hello World</h1>
        <p>This is a simple test.</p>
    </body>
    </html>
    """


@pytest.fixture
def html_with_links() -> str:
    """HTML with links that are kept, filtered or resolved."""
    return """
    <html>
    <head>
        <link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Roboto">
        <link rel="icon" href="/favicon.ico">
        <script src="https://cdnjs.cloudflare.com/ajax/libs/jquery/3.7.1/jquery.min.js"></script>
        <script src="/static/app.js"></script>
    </head>
    <body>
        <a href="/docs/intro?lang=en#top">Intro</a>
        <a href="https://example.com/pricing">Pricing</a>
        <a href="https://partner.org/home">Partner</a>
        <a href="https://unrelated.io/page">Unrelated</a>
        <a href="mailto:test@example.com">Email Link</a>
        <a href="javascript:void(0)">JS Link</a>
        <a href="tel:+15555555555">Phone</a>
        <a href="#section">Anchor Link</a>
        <a href="/">Home</a>
        <a href="/report.pdf">Report</a>
        <a href="/docs/intro">Intro again</a>
        <img src="/images/photo.png">
        <form action="/search"></form>
    </body>
    </html>
    """


def make_response(
    status_code: int = 200,
    text: str = "",
    reason: str = "OK",
    content_type: str = "text/html; charset=utf-8",
) -> Mock:
    """Build a mock requests.Response; statuses >= 400 raise from raise_for_status."""
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    response.headers = {"Content-Type": content_type}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error: {reason} for url: https://example.com",
            response=response,
        )
    return response


def links_page(count: int, host: str = "https://example.com") -> str:
    """HTML page with count distinct same-site links."""
    anchors = "\n".join(f'<a href="{host}/page-{i}">Page {i}</a>' for i in range(count))
    return f"<html><body><p>Listing</p>{anchors}</body></html>"
