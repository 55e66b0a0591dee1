"""
Prometheus metrics for the minion tracker.

Counters cover store operations, HP adjustments, and HTTP error responses.
"""

from prometheus_client import (
    Counter,
    Info,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from minion_tracker import __version__
from minion_tracker.core.config import settings
from minion_tracker.core.logging_config import get_logger

logger = get_logger(__name__)

# Create a custom registry for our metrics
REGISTRY = CollectorRegistry()

# =============================================================================
# APPLICATION INFO METRICS
# =============================================================================

app_info = Info(
    "minion_tracker_info", "Minion tracker application information", registry=REGISTRY
)

# =============================================================================
# STORE METRICS
# =============================================================================

store_operations_total = Counter(
    "minion_store_operations_total",
    "Total number of stat record store operations",
    ["operation", "status"],
    registry=REGISTRY,
)

hp_adjustments_total = Counter(
    "minion_hp_adjustments_total",
    "Total number of HP adjustments",
    ["direction"],
    registry=REGISTRY,
)

# =============================================================================
# HTTP METRICS
# =============================================================================

http_errors_total = Counter(
    "minion_http_errors_total",
    "Total number of HTTP error responses",
    ["status_code", "error_type"],
    registry=REGISTRY,
)

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def init_metrics():
    """Initialize metrics with application information."""
    app_info.info(
        {
            "version": __version__,
            "service": "minion-tracker",
            "environment": settings.ENVIRONMENT,
        }
    )
    logger.info("Prometheus metrics initialized")


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST


class MetricsHelper:
    """Helper class for manual metrics tracking."""

    @staticmethod
    def track_store_operation(operation: str, status: str = "success"):
        """Track a store operation and its outcome."""
        store_operations_total.labels(operation=operation, status=status).inc()

    @staticmethod
    def track_hp_adjustment(delta: int):
        """Track an HP adjustment by its direction."""
        if delta > 0:
            direction = "heal"
        elif delta < 0:
            direction = "damage"
        else:
            direction = "none"
        hp_adjustments_total.labels(direction=direction).inc()

    @staticmethod
    def track_http_error(status_code: int, error_type: str):
        """Track an error response produced by an exception handler."""
        http_errors_total.labels(
            status_code=str(status_code), error_type=error_type
        ).inc()


# Global metrics helper instance
metrics = MetricsHelper()
