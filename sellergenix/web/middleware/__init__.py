"""FastAPI middleware."""

from __future__ import annotations

from sellergenix.web.middleware.prometheus import PrometheusMiddleware

__all__ = ["PrometheusMiddleware"]
