"""In-memory scrape metrics for the stats endpoint."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class ScrapeRecord:
    """Outcome of one single-page scrape."""

    url: str
    timestamp: datetime
    success: bool
    attempts: int | None = None
    elapsed_ms: float | None = None
    error_type: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "attempts": self.attempts,
            "elapsed_ms": self.elapsed_ms,
            "error_type": self.error_type,
            "error": self.error,
        }


@dataclass
class ServiceMetrics:
    """Process-wide counters, reset on restart."""

    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_scrapes: int = 0
    successful_scrapes: int = 0
    failed_scrapes: int = 0
    total_retries: int = 0
    batches: int = 0
    error_types: Counter[str] = field(default_factory=Counter)
    recent_scrapes: deque[ScrapeRecord] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[ScrapeRecord] = field(default_factory=lambda: deque(maxlen=20))

    def record_scrape(
        self,
        url: str,
        success: bool,
        attempts: int | None = None,
        elapsed_ms: float | None = None,
        error_type: str | None = None,
        error: str | None = None,
    ) -> None:
        """Record a single-page scrape.

        Args:
            url: The URL that was scraped
            success: Whether the scrape succeeded
            attempts: Fetch attempts used, when known
            elapsed_ms: Time of the successful fetch in milliseconds
            error_type: Failure classification
            error: Error message if failed
        """
        self.total_scrapes += 1

        if success:
            self.successful_scrapes += 1
        else:
            self.failed_scrapes += 1
            self.error_types[error_type or "unknown"] += 1

        if attempts and attempts > 1:
            self.total_retries += attempts - 1

        record = ScrapeRecord(
            url=url,
            timestamp=datetime.now(timezone.utc),
            success=success,
            attempts=attempts,
            elapsed_ms=elapsed_ms,
            error_type=error_type,
            error=error,
        )
        self.recent_scrapes.append(record)
        if not success:
            self.recent_errors.append(record)

    def record_batch(self) -> None:
        self.batches += 1

    def get_uptime_seconds(self) -> float:
        """Get service uptime in seconds."""
        return (datetime.now(timezone.utc) - self.start_time).total_seconds()

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_scrapes == 0:
            return 0.0
        return (self.successful_scrapes / self.total_scrapes) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        return {
            "status": "healthy",
            "uptime_seconds": round(self.get_uptime_seconds(), 1),
            "start_time": self.start_time.isoformat(),
            "scrapes": {
                "total": self.total_scrapes,
                "successful": self.successful_scrapes,
                "failed": self.failed_scrapes,
                "success_rate": round(self.get_success_rate(), 2),
                "retries": self.total_retries,
                "batches": self.batches,
            },
            "error_types": dict(self.error_types),
            # Newest first
            "recent_scrapes": [r.to_dict() for r in list(self.recent_scrapes)[-10:][::-1]],
            "recent_errors": [r.to_dict() for r in list(self.recent_errors)[-10:][::-1]],
        }


# Global metrics instance
_metrics = ServiceMetrics()


def get_metrics() -> ServiceMetrics:
    """Get the global metrics instance."""
    return _metrics


def reset_metrics() -> ServiceMetrics:
    """Replace the global metrics with a fresh instance and return it."""
    global _metrics
    _metrics = ServiceMetrics()
    return _metrics


def record_scrape(
    url: str,
    success: bool,
    attempts: int | None = None,
    elapsed_ms: float | None = None,
    error_type: str | None = None,
    error: str | None = None,
) -> None:
    """Record a single-page scrape in the global metrics."""
    _metrics.record_scrape(url, success, attempts, elapsed_ms, error_type, error)


def record_batch() -> None:
    """Count a batch request in the global metrics."""
    _metrics.record_batch()
