"""Admin API functionality for monitoring.

This module provides administrative endpoints for:
- Health checks
- Scrape statistics
- Active configuration

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: Stats and config gathering
"""

from scraper_service.admin.router import (
    api_config_get,
    api_stats,
    health_check,
    register_admin_routes,
)
from scraper_service.admin.service import (
    get_current_config,
    get_stats,
)

__all__ = [
    # Router functions
    "api_config_get",
    "api_stats",
    "health_check",
    "register_admin_routes",
    # Service functions
    "get_current_config",
    "get_stats",
]
