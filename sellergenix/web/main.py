"""FastAPI application for the SellerGenix inventory planning API."""

from __future__ import annotations

import time

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from sellergenix.core.config import get_settings
from sellergenix.core.logging import get_logger, get_request_id, set_request_id, setup_logging
from sellergenix.core.metrics import app_info, app_uptime_seconds
from sellergenix.web.middleware import PrometheusMiddleware
from sellergenix.web.routers import ai, export, healthcheck, inventory

__version__ = "0.4.0"

log = get_logger("sellergenix.web")

_settings = get_settings()
setup_logging(level=_settings.log_level, file_path=_settings.log_file)

# Application start time for uptime calculation
APP_START_TIME = time.time()

app = FastAPI(
    title=_settings.app_name,
    version=__version__,
    description="Inventory planning and analytics API for Amazon sellers",
)

app.add_middleware(PrometheusMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app_info.labels(version=__version__, environment="production").set(1)


# Global exception handler for unhandled errors (500)
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions with proper logging and response."""
    request_id = get_request_id() or set_request_id()

    log.error(
        "unhandled_exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "request_id": request_id,
            "hint": "Contact support with this request_id",
        },
    )


# Include routers
app.include_router(healthcheck.router, tags=["Monitoring"])
app.include_router(inventory.router, prefix="/api/v1/inventory", tags=["Inventory"])
app.include_router(export.router, prefix="/api/v1/export", tags=["Export"])
app.include_router(ai.router, prefix="/api/v1/ai", tags=["AI"])


@app.get("/health")
def health():
    """Basic health check for monitoring."""
    return {"status": "healthy"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    app_uptime_seconds.set(time.time() - APP_START_TIME)
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
