"""Admin service layer for stats and configuration reporting."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from scraper_service.config import USER_AGENTS, settings
from scraper_service.metrics import get_metrics


def get_stats() -> dict[str, Any]:
    """Get service statistics and metrics.

    Returns:
        Dictionary with uptime, scrape counters and recent activity
    """
    return get_metrics().to_dict()


def get_current_config() -> dict[str, Any]:
    """Get the configuration the service was started with.

    Returns:
        Dictionary with settings values and the User-Agent pool size
    """
    return {
        "config": asdict(settings),
        "user_agents": len(USER_AGENTS),
        "note": "Configuration is read from the environment at startup",
    }
