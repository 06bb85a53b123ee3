"""Advanced healthcheck endpoint with process checks."""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from sellergenix.core.config import get_settings
from sellergenix.core.logging import get_logger

log = get_logger("sellergenix.web.healthcheck")

router = APIRouter()


@router.get("/healthz")
def healthz():
    """Comprehensive health check endpoint.

    Checks:
    - Configuration loads
    - Disk space
    - Memory usage
    - Process uptime

    Returns:
        200 OK if all checks pass
        503 Service Unavailable if any check fails
    """
    status = "healthy"
    checks = {}
    overall_healthy = True

    # 1. Configuration check
    try:
        settings = get_settings()
        settings.reorder_policy()
        checks["config"] = {"status": "ok"}
    except (RuntimeError, ValueError) as e:
        checks["config"] = {"status": "error", "error": str(e)}
        overall_healthy = False
        status = "unhealthy"

    # 2. Disk space check
    try:
        disk = psutil.disk_usage("/")
        disk_free_gb = disk.free / (1024**3)
        checks["disk"] = {
            "status": "warning" if disk.percent > 90 else "ok",
            "free_gb": round(disk_free_gb, 2),
            "used_percent": disk.percent,
        }
        if disk.percent > 90 and status == "healthy":
            status = "degraded"
    except OSError as e:
        checks["disk"] = {"status": "error", "error": str(e)}
        overall_healthy = False
        status = "unhealthy"

    # 3. Memory check
    try:
        mem = psutil.virtual_memory()
        checks["memory"] = {
            "status": "warning" if mem.percent > 90 else "ok",
            "available_mb": round(mem.available / (1024**2), 2),
            "used_percent": mem.percent,
        }
        if mem.percent > 90 and status == "healthy":
            status = "degraded"
    except OSError as e:
        checks["memory"] = {"status": "error", "error": str(e)}
        overall_healthy = False
        status = "unhealthy"

    # 4. Process uptime
    uptime_seconds = time.time() - psutil.Process(os.getpid()).create_time()
    checks["uptime"] = {"status": "ok", "seconds": round(uptime_seconds, 1)}

    if not overall_healthy:
        log.warning("healthcheck_failed", extra={"checks": checks})

    return JSONResponse(
        status_code=200 if overall_healthy else 503,
        content={
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        },
    )
