"""Service configuration loaded once from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Browser User-Agents rotated per request
USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# Headers sent with every fetch, User-Agent is added per request
DEFAULT_HEADERS: tuple[tuple[str, str], ...] = (
    ("Accept", "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"),
    ("Accept-Language", "en-US,en;q=0.9"),
    ("Accept-Encoding", "gzip, deflate, br"),
    ("Cache-Control", "no-cache"),
    ("Connection", "keep-alive"),
    ("Upgrade-Insecure-Requests", "1"),
)


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    host: str = "0.0.0.0"
    port: int = 3001
    service_name: str = "Scraper Service"

    # Fetcher
    request_timeout: float = 30.0
    max_attempts: int = 2
    retry_delay: float = 2.0
    max_redirects: int = 5

    # Batch driver
    max_batch_urls: int = 3
    batch_delay: float = 3.0
    batch_item_timeout: float = 45.0

    # HTTP surface
    max_body_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from e


def load_settings() -> Settings:
    """Build settings from environment variables.

    Returns:
        Settings populated from the environment, falling back to defaults

    Raises:
        ValueError: If a numeric variable cannot be parsed or is out of range
    """
    defaults = Settings()
    loaded = Settings(
        host=os.getenv("HOST", defaults.host),
        port=_env_int("PORT", defaults.port),
        service_name=os.getenv("SERVICE_NAME", defaults.service_name),
        request_timeout=_env_float("REQUEST_TIMEOUT", defaults.request_timeout),
        max_attempts=_env_int("MAX_ATTEMPTS", defaults.max_attempts),
        retry_delay=_env_float("RETRY_DELAY", defaults.retry_delay),
        max_redirects=_env_int("MAX_REDIRECTS", defaults.max_redirects),
        max_batch_urls=_env_int("MAX_BATCH_URLS", defaults.max_batch_urls),
        batch_delay=_env_float("BATCH_DELAY", defaults.batch_delay),
        batch_item_timeout=_env_float("BATCH_ITEM_TIMEOUT", defaults.batch_item_timeout),
        max_body_bytes=_env_int("MAX_BODY_BYTES", defaults.max_body_bytes),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )

    if loaded.max_attempts < 1:
        raise ValueError("MAX_ATTEMPTS must be at least 1")
    if loaded.max_batch_urls < 1:
        raise ValueError("MAX_BATCH_URLS must be at least 1")

    return loaded


# Loaded once at import; import this everywhere:
#   from scraper_service.config import settings
settings = load_settings()
