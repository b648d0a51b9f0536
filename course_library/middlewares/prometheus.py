"""
Prometheus metrics middleware for HTTP requests.

Tracks request counts, duration, and in-progress requests.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match
from starlette.types import ASGIApp

from course_library.utils.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)


def route_template(request: Request) -> str:
    """
    Path template of the route serving ``request``.

    Requests matching no route are labelled with their raw path.
    """
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to track Prometheus metrics for HTTP requests.

    Tracks the following metrics:
    - http_requests_total: Counter of total requests by method, endpoint, and status
    - http_request_duration_seconds: Histogram of request durations
    - http_requests_in_progress: Gauge of in-progress requests

    Endpoints are labelled with route templates so ids never become label
    values.
    """

    async def dispatch(self, request: Request, call_next: ASGIApp) -> Response:
        method = request.method
        path = route_template(request)

        http_requests_in_progress.labels(method=method, endpoint=path).inc()
        start_time = time.time()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_request_duration_seconds.labels(
                method=method, endpoint=path
            ).observe(time.time() - start_time)
            http_requests_total.labels(
                method=method, endpoint=path, status_code=status_code
            ).inc()
            http_requests_in_progress.labels(
                method=method, endpoint=path
            ).dec()
