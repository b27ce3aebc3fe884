"""Admin API routes for health, stats and config."""

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from scraper_service.admin.service import get_current_config, get_stats


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


async def api_stats(request: Request) -> JSONResponse:
    """Get service statistics and metrics as JSON.

    Returns:
        JSONResponse with scrape metrics
    """
    return JSONResponse(get_stats())


async def api_config_get(request: Request) -> JSONResponse:
    """Get the active configuration.

    Returns:
        JSONResponse with current config values
    """
    return JSONResponse(get_current_config())


def register_admin_routes(mcp: FastMCP) -> None:
    """Register admin routes on the server.

    Args:
        mcp: FastMCP server instance to register routes on
    """
    mcp.custom_route("/healthz", methods=["GET"])(health_check)
    mcp.custom_route("/api/stats", methods=["GET"])(api_stats)
    mcp.custom_route("/api/config", methods=["GET"])(api_config_get)
