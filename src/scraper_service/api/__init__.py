"""Public HTTP API of the scraper service.

Routes:
- GET  /             service status
- POST /scrape       single-page scrape
- POST /scrape-batch sequential batch scrape
"""

from scraper_service.api.router import (
    register_api_routes,
    scrape_batch_endpoint,
    scrape_endpoint,
    service_status,
)

__all__ = [
    "register_api_routes",
    "scrape_batch_endpoint",
    "scrape_endpoint",
    "service_status",
]
