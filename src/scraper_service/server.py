"""HTTP and MCP server for the scraper service."""

from __future__ import annotations

import logging

import uvicorn
from mcp.server.fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware

from scraper_service.admin.router import register_admin_routes
from scraper_service.api.router import register_api_routes
from scraper_service.config import settings
from scraper_service.tools.router import register_scraping_tools

logger = logging.getLogger(__name__)

# Stateless mode auto-creates sessions for unknown session IDs, so MCP clients
# survive restarts without a new initialize handshake
mcp = FastMCP(
    settings.service_name,
    instructions=(
        "A scraping service that fetches webpages with browser-like headers and "
        "returns their plain text and a short list of normalized links. "
        "Supports single pages and small sequential batches."
    ),
    stateless_http=True,
    host=settings.host,
    port=settings.port,
)

register_scraping_tools(mcp)
register_api_routes(mcp)
register_admin_routes(mcp)


def create_app() -> Starlette:
    """Build the ASGI application: JSON routes, admin routes and the /mcp endpoint.

    Returns:
        Starlette application with CORS enabled for every origin
    """
    app = mcp.streamable_http_app()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


def run_server(host: str = settings.host, port: int = settings.port) -> None:
    """Run the service with uvicorn.

    Args:
        host: Host to bind to (default: HOST or 0.0.0.0)
        port: Port to bind to (default: PORT or 3001)
    """
    logger.info(f"{settings.service_name} running on {host}:{port}")
    logger.info(f"Health check: http://localhost:{port}/")
    uvicorn.run(create_app(), host=host, port=port, log_level=settings.log_level.lower())
