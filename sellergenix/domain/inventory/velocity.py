"""Sales velocity (average daily units) for inventory planning.

NO DATA ACCESS - pure functions only. Sales history is loaded by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from typing import NamedTuple


class DailyUnits(NamedTuple):
    """Units sold for one product on one day."""

    d: date
    units: int | None


def avg_daily_sales(
    daily_units: Iterable[DailyUnits | tuple[date, int | None]],
    *,
    window_days: int = 30,
    as_of: date | None = None,
) -> float | None:
    """Calculate trailing average daily sales.

    The total is divided by the full window, not by the number of days with
    sales, so sparse sellers are not over-projected. Result is rounded to
    2 decimals.

    Args:
        daily_units: (date, units) rows, any order; None units count as 0
        window_days: Trailing window length in days (default 30)
        as_of: Window end date; rows outside [as_of - window_days, as_of]
               are ignored. None keeps all rows.

    Returns:
        Average units per day, or None if there are no rows in the window

    Examples:
        >>> avg_daily_sales([(date(2025, 1, 1), 30), (date(2025, 1, 2), 60)])
        3.0
        >>> avg_daily_sales([]) is None
        True

    """
    if window_days <= 0:
        return None

    start = as_of - timedelta(days=window_days) if as_of else None

    total_units = 0
    rows = 0
    for d, units in daily_units:
        if as_of is not None and not (start <= d <= as_of):
            continue
        total_units += units or 0
        rows += 1

    if rows == 0:
        return None

    return round(total_units / window_days, 2)


def resolve_velocity(
    manual: float | None,
    daily_units: Iterable[DailyUnits | tuple[date, int | None]] = (),
    *,
    window_days: int = 30,
    as_of: date | None = None,
) -> float | None:
    """Pick velocity for planning: manual override first, else sales history.

    Examples:
        >>> resolve_velocity(4.5, [(date(2025, 1, 1), 300)])
        4.5
        >>> resolve_velocity(None, [(date(2025, 1, 1), 300)])
        10.0

    """
    if manual is not None and manual > 0:
        return manual
    return avg_daily_sales(daily_units, window_days=window_days, as_of=as_of)
