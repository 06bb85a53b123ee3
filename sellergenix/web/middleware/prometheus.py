"""Prometheus metrics and request correlation middleware for FastAPI."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from sellergenix.core.logging import set_request_id
from sellergenix.core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

REQUEST_ID_HEADER = "X-Request-ID"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect HTTP metrics and tag each request with a request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics."""
        method = request.method
        endpoint = normalize_path(request.url.path)
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
        finally:
            duration = time.time() - start_time
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                duration
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def normalize_path(path: str) -> str:
    """Normalize path by replacing IDs with placeholders.

    Examples:
        >>> normalize_path("/api/v1/products/B08XYZ1234/plan")
        '/api/v1/products/{id}/plan'
        >>> normalize_path("/api/v1/inventory/preview")
        '/api/v1/inventory/preview'
    """
    parts = path.split("?")[0].split("/")
    normalized = []
    for i, part in enumerate(parts):
        if not part:
            normalized.append(part)
            continue

        if (
            part.isdigit()  # Numeric ID
            or (len(part) == 10 and part.isalnum() and part.isupper())  # ASIN
            or (i > 0 and parts[i - 1] == "products")
        ):
            normalized.append("{id}")
        else:
            normalized.append(part)

    return "/".join(normalized)
