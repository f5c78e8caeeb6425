"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency (p50, p95, p99)
- Request count by endpoint and status
- Active request gauge
- Qualification oracle latency and fallbacks
- Swipe decisions and undos

Usage:
    from jobswipe.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

# Request latency histogram with custom buckets for sub-second monitoring
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method"]
)

# Qualification oracle metrics
ORACLE_LATENCY = Histogram(
    "oracle_verdict_seconds",
    "Time to obtain a qualification verdict",
    ["provider"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0]
)

ORACLE_FALLBACKS = Counter(
    "oracle_fallbacks_total",
    "Verdicts replaced by the technical-error fallback",
    ["provider", "cause"]  # timeout, upstream, unexpected
)

# Swipe ledger metrics
SWIPE_DECISIONS = Counter(
    "swipe_decisions_total",
    "Recorded swipe decisions",
    ["decision"]
)

SWIPE_UNDOS = Counter(
    "swipe_undos_total",
    "Swipes reversed by undo"
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for Prometheus metrics collection.

    Records:
    - Request latency
    - Request count by status code
    - Active request count
    """

    def __init__(self, app: FastAPI, app_name: str = "jobswipe"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """Process request and record metrics."""
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        ACTIVE_REQUESTS.labels(method=method).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
        except Exception as e:
            status = "500"
            logger.error(f"Request error: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time
            # Routing has filled in path_params by now
            endpoint = self._get_endpoint(request)

            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).observe(duration)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            ACTIVE_REQUESTS.labels(method=method).dec()

        return response

    def _get_endpoint(self, request: Request) -> str:
        """
        Get normalized endpoint path from request.

        Path parameter values are put back as their placeholders
        (e.g., /admin/jobs/7 → /admin/jobs/{job_id}) to avoid high
        cardinality.
        """
        path_params = request.scope.get("path_params") or {}
        if not path_params:
            return request.url.path

        placeholders = {str(value): name for name, value in path_params.items()}
        segments = request.url.path.split("/")
        return "/".join(
            "{" + placeholders[segment] + "}" if segment in placeholders else segment
            for segment in segments
        )


def metrics_endpoint(request: Request) -> Response:
    """Endpoint handler for Prometheus metrics scraping."""
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware, app_name="jobswipe")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_oracle_latency(provider: str, duration: float) -> None:
    """Record how long a qualification verdict took."""
    ORACLE_LATENCY.labels(provider=provider).observe(duration)


def record_oracle_fallback(provider: str, cause: str) -> None:
    """Record a verdict replaced by the fallback."""
    ORACLE_FALLBACKS.labels(provider=provider, cause=cause).inc()


def record_swipe_decision(decision: str) -> None:
    SWIPE_DECISIONS.labels(decision=decision).inc()


def record_swipe_undo() -> None:
    SWIPE_UNDOS.inc()
