"""Prometheus metrics for the catalog API.

Exposes HTTP request metrics, a favorites counter and a /metrics
endpoint for Prometheus scraping.
"""

import time

from fastapi import FastAPI
from prometheus_client import Counter, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# =============================================================================
# HTTP METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "catalog_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# =============================================================================
# CATALOG METRICS
# =============================================================================

FAVORITE_CHANGES_TOTAL = Counter(
    "catalog_favorite_changes_total",
    "Favorite additions and removals that changed state",
    ["kind", "action"],
)


def record_favorite_change(kind: str, action: str) -> None:
    """Count a favorite toggle that changed state.

    Args:
        kind: Content kind ('movie', 'series', 'project').
        action: 'added' or 'removed'.
    """
    FAVORITE_CHANGES_TOTAL.labels(kind=kind, action=action).inc()


# =============================================================================
# MIDDLEWARE
# =============================================================================


def _route_path(request: Request) -> str:
    """Route template of the matched endpoint, raw path otherwise.

    Templates such as ``/api/v1/movies/{movie_id}`` keep label
    cardinality bounded.
    """
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records HTTP request metrics for Prometheus.

    Measures request duration and counts requests by method, route and status.
    Skips recording for the /metrics endpoint itself.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in the chain.

        Returns:
            HTTP response from downstream handler.
        """
        if request.url.path.startswith("/metrics"):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        method = request.method
        path = _route_path(request)
        HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=str(response.status_code)).inc()
        HTTP_REQUEST_DURATION.labels(method=method, path=path).observe(duration)

        return response


# =============================================================================
# MOUNT HELPER
# =============================================================================


def mount_metrics(app: FastAPI) -> None:
    """Mount the /metrics Prometheus endpoint on a FastAPI app.

    The mounted ASGI sub-app bypasses routing dependencies, so no
    authentication is required.

    Args:
        app: FastAPI application instance.
    """
    app.mount("/metrics", make_asgi_app())
