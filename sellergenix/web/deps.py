"""FastAPI dependencies for planner policy and reference date."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Depends, HTTPException, Query

from sellergenix.core.config import Settings, get_settings
from sellergenix.domain.inventory.planner import ReorderPolicy


def settings_dep() -> Settings:
    """Settings dependency (overridable in tests)."""
    return get_settings()


def get_policy(settings: Annotated[Settings, Depends(settings_dep)]) -> ReorderPolicy:
    """Planner policy from configured thresholds.

    Raises:
        HTTPException: If configured thresholds are inconsistent

    """
    try:
        return settings.reorder_policy()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Invalid planner policy: {e}") from e


def get_as_of(
    settings: Annotated[Settings, Depends(settings_dep)],
    as_of: date | None = Query(None, description="Plan reference date (YYYY-MM-DD), default today"),
) -> date:
    """Reference date for reorder countdowns.

    The system clock is read here, at the API boundary, and nowhere in the
    planning core.
    """
    if as_of is not None:
        return as_of
    try:
        tz = ZoneInfo(settings.app_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc
    return datetime.now(tz).date()


# Type aliases for cleaner endpoints
Policy = Annotated[ReorderPolicy, Depends(get_policy)]
AsOf = Annotated[date, Depends(get_as_of)]
AppSettings = Annotated[Settings, Depends(settings_dep)]
