"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Swipe feed domain counters
"""

from jobswipe.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    ORACLE_LATENCY,
    ORACLE_FALLBACKS,
    SWIPE_DECISIONS,
    SWIPE_UNDOS,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "ORACLE_LATENCY",
    "ORACLE_FALLBACKS",
    "SWIPE_DECISIONS",
    "SWIPE_UNDOS",
]
