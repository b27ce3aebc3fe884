"""Main entry point for the scraper service."""

from __future__ import annotations

import logging
import sys

from scraper_service.config import settings
from scraper_service.server import run_server


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Parse command line arguments
    host = settings.host
    port = settings.port

    if len(sys.argv) > 1:
        host = sys.argv[1]
    if len(sys.argv) > 2:
        port = int(sys.argv[2])

    run_server(host=host, port=port)


if __name__ == "__main__":
    main()
