"""Inventory reorder planning.

Business logic for calculating, per product:
- Days of FBA / FBM stock at current sales velocity
- Days until a reorder must be placed (lead time + safety buffer)
- Ideal stock by the 2.5x monthly rule (75 days of sales)
- Units to order and a reorder status with a human-readable recommendation

NO DATA ACCESS, NO CLOCK - pure functions only. Callers pass ``as_of``.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any


class ReorderStatus(str, Enum):
    """Reorder urgency, most urgent first."""

    CRITICAL = "critical"
    WARNING = "warning"
    SAFE = "safe"
    OVERSTOCKED = "overstocked"
    UNKNOWN = "unknown"


# Sort order for product lists (most urgent first, unknown last)
STATUS_PRIORITY = {
    ReorderStatus.CRITICAL: 0,
    ReorderStatus.WARNING: 1,
    ReorderStatus.SAFE: 2,
    ReorderStatus.OVERSTOCKED: 3,
    ReorderStatus.UNKNOWN: 4,
}

NO_SALES_DATA_MESSAGE = (
    "No sales data available. Connect Amazon account to enable smart inventory planning."
)

# Upper bounds keeping slow movers and huge inputs inside int/date range
MAX_STOCK_DAYS = 36_500  # 100 years
MAX_UNITS = 10**12


@dataclass(frozen=True)
class ReorderPolicy:
    """Planner thresholds, in days of sales.

    Defaults follow the 2.5x monthly rule: ideal = 2.5 months (75 days),
    minimum safe = 1.5 months (45 days), overstocked = 4 months (120 days).
    """

    ideal_stock_days: int = 75
    minimum_safe_stock_days: int = 45
    overstocked_threshold_days: int = 120
    critical_window_days: int = 7
    warning_window_days: int = 14

    def __post_init__(self) -> None:
        if self.ideal_stock_days <= 0:
            raise ValueError("ideal_stock_days must be positive")
        if self.overstocked_threshold_days <= 0:
            raise ValueError("overstocked_threshold_days must be positive")
        if min(
            self.minimum_safe_stock_days, self.critical_window_days, self.warning_window_days
        ) < 0:
            raise ValueError("policy thresholds must not be negative")
        if self.critical_window_days > self.warning_window_days:
            raise ValueError("critical_window_days must not exceed warning_window_days")
        if max(
            self.ideal_stock_days,
            self.minimum_safe_stock_days,
            self.overstocked_threshold_days,
            self.warning_window_days,
        ) > MAX_STOCK_DAYS:
            raise ValueError(f"policy thresholds must not exceed {MAX_STOCK_DAYS} days")


DEFAULT_POLICY = ReorderPolicy()


@dataclass(frozen=True)
class InventorySnapshot:
    """Stock and velocity facts for one product at calculation time."""

    fba_stock: int = 0
    fbm_stock: int = 0
    avg_daily_sales: float | None = None
    lead_time_days: int = 0
    safety_buffer_days: int = 0


@dataclass(frozen=True)
class ReorderPlan:
    """Derived reorder decision. Recomputed on every request, never stored."""

    reorder_status: ReorderStatus
    order_recommendation: str
    ideal_stock_days: int
    days_of_fba_stock: int | None = None
    days_of_fbm_stock: int | None = None
    total_days_of_stock: int | None = None
    days_until_reorder: int | None = None
    reorder_date: date | None = None
    avg_daily_sales: float | None = None
    ideal_stock_units: int | None = None
    current_stock_vs_ideal: int | None = None
    units_to_order: int | None = None
    excess_units: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with ISO dates and plain status string."""
        data = asdict(self)
        data["reorder_status"] = self.reorder_status.value
        data["reorder_date"] = self.reorder_date.isoformat() if self.reorder_date else None
        return data


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves rounded up (not to even).

    >>> round_half_up(2.5)
    3
    >>> round_half_up(-0.5)
    0
    """
    return math.floor(value + 0.5)


def _has_velocity(avg_daily_sales: float | None) -> bool:
    return (
        avg_daily_sales is not None
        and math.isfinite(avg_daily_sales)
        and avg_daily_sales > 0
    )


def _days_of_stock(units: int, velocity: float) -> int:
    days = units / velocity
    if not math.isfinite(days) or days > MAX_STOCK_DAYS:
        return MAX_STOCK_DAYS
    return round_half_up(days)


def _whole_units(value: float) -> int:
    """Round units up, saturating at MAX_UNITS (also for float overflow)."""
    if not math.isfinite(value) or value >= MAX_UNITS:
        return MAX_UNITS
    return math.ceil(value)


def _shift_date(as_of: date, days: int) -> date:
    """``as_of + days``, clamped to the representable date range."""
    days = max(-(as_of - date.min).days, min(days, (date.max - as_of).days))
    return as_of + timedelta(days=days)


def unknown_plan(policy: ReorderPolicy = DEFAULT_POLICY) -> ReorderPlan:
    """Plan for products without usable sales velocity."""
    return ReorderPlan(
        reorder_status=ReorderStatus.UNKNOWN,
        order_recommendation=NO_SALES_DATA_MESSAGE,
        ideal_stock_days=policy.ideal_stock_days,
    )


def classify_status(
    total_days_of_stock: int,
    days_until_reorder: int,
    policy: ReorderPolicy = DEFAULT_POLICY,
) -> ReorderStatus:
    """Reorder status from stock coverage and reorder countdown.

    Rules are evaluated top to bottom, first match wins:
        1. coverage >= overstocked threshold -> overstocked
        2. days until reorder <= 0           -> critical (overdue)
        3. days until reorder <= 7           -> critical (imminent)
        4. days until reorder <= 14          -> warning
        5. coverage < minimum safe           -> warning
        6. otherwise                          -> safe
    """
    if total_days_of_stock >= policy.overstocked_threshold_days:
        return ReorderStatus.OVERSTOCKED
    if days_until_reorder <= 0:
        return ReorderStatus.CRITICAL
    if days_until_reorder <= policy.critical_window_days:
        return ReorderStatus.CRITICAL
    if days_until_reorder <= policy.warning_window_days:
        return ReorderStatus.WARNING
    if total_days_of_stock < policy.minimum_safe_stock_days:
        return ReorderStatus.WARNING
    return ReorderStatus.SAFE


def _recommendation(
    *,
    total_days_of_stock: int,
    days_until_reorder: int,
    reorder_date: date,
    units_to_order: int,
    excess_units: int,
    policy: ReorderPolicy,
) -> str:
    when = reorder_date.isoformat()

    if total_days_of_stock >= policy.overstocked_threshold_days:
        return (
            f"Overstocked by {excess_units} units ({total_days_of_stock} days). "
            "Consider running promotions or reducing next order."
        )
    if days_until_reorder <= 0:
        return (
            f"ORDER NOW! You need {units_to_order} units immediately. "
            "Stock will run out before delivery arrives!"
        )
    if days_until_reorder <= policy.critical_window_days:
        return (
            f"Order {units_to_order} units within {days_until_reorder} days to avoid stockout!"
        )
    if days_until_reorder <= policy.warning_window_days:
        return f"Order {units_to_order} units by {when} to maintain optimal stock levels."
    if total_days_of_stock < policy.minimum_safe_stock_days:
        return (
            f"Stock below recommended {policy.minimum_safe_stock_days}-day minimum. "
            f"Consider ordering {units_to_order} units to reach ideal "
            f"{policy.ideal_stock_days}-day stock."
        )
    if total_days_of_stock >= policy.ideal_stock_days:
        return (
            f"Stock levels optimal ({total_days_of_stock} days). "
            f"Next order recommended by {when}."
        )
    return (
        f"Stock OK ({total_days_of_stock} days). Order {units_to_order} units by {when} "
        f"to reach ideal {policy.ideal_stock_days}-day stock."
    )


def compute_reorder_plan(
    snapshot: InventorySnapshot,
    *,
    as_of: date,
    policy: ReorderPolicy = DEFAULT_POLICY,
) -> ReorderPlan:
    """Compute reorder plan for one product.

    Days of Stock    = round(stock / velocity)
    Days to Reorder  = total days of stock - lead time - safety buffer
    Ideal Stock      = ceil(velocity * ideal_stock_days)
    Units to Order   = max(0, ceil(ideal - (stock - velocity * lead time)))

    Negative stock, lead time and buffer values are clamped to zero.
    Missing, zero, negative or non-finite velocity gives the ``unknown`` plan.
    Days are capped at MAX_STOCK_DAYS and units at MAX_UNITS; the reorder
    date saturates at ``date.min`` / ``date.max``.

    Args:
        snapshot: Stock levels, velocity and lead time for the product
        as_of: Date the reorder countdown starts from
        policy: Threshold policy (defaults to the 2.5x monthly rule)

    Returns:
        ReorderPlan; the same inputs always give an equal plan.

    Examples:
        >>> plan = compute_reorder_plan(
        ...     InventorySnapshot(fba_stock=0, avg_daily_sales=5, lead_time_days=10,
        ...                       safety_buffer_days=7),
        ...     as_of=date(2025, 1, 1),
        ... )
        >>> plan.reorder_status.value, plan.units_to_order
        ('critical', 425)

    """
    velocity = snapshot.avg_daily_sales
    if not _has_velocity(velocity):
        return unknown_plan(policy)

    fba_stock = min(max(0, snapshot.fba_stock or 0), MAX_UNITS)
    fbm_stock = min(max(0, snapshot.fbm_stock or 0), MAX_UNITS)
    lead_time = min(max(0, snapshot.lead_time_days or 0), MAX_STOCK_DAYS)
    safety_buffer = min(max(0, snapshot.safety_buffer_days or 0), MAX_STOCK_DAYS)
    total_stock = fba_stock + fbm_stock

    days_of_fba_stock = _days_of_stock(fba_stock, velocity)
    days_of_fbm_stock = _days_of_stock(fbm_stock, velocity) if fbm_stock > 0 else 0
    total_days_of_stock = days_of_fba_stock + days_of_fbm_stock

    days_until_reorder = total_days_of_stock - lead_time - safety_buffer
    # May land in the past: shows how overdue the reorder is
    reorder_date = _shift_date(as_of, days_until_reorder)

    ideal_stock_units = _whole_units(velocity * policy.ideal_stock_days)
    current_stock_vs_ideal = round_half_up(total_stock / ideal_stock_units * 100)

    stock_after_lead_time = total_stock - velocity * lead_time
    units_to_order = max(0, _whole_units(ideal_stock_units - stock_after_lead_time))
    excess_units = total_stock - ideal_stock_units

    status = classify_status(total_days_of_stock, days_until_reorder, policy)
    recommendation = _recommendation(
        total_days_of_stock=total_days_of_stock,
        days_until_reorder=days_until_reorder,
        reorder_date=reorder_date,
        units_to_order=units_to_order,
        excess_units=excess_units,
        policy=policy,
    )

    return ReorderPlan(
        reorder_status=status,
        order_recommendation=recommendation,
        ideal_stock_days=policy.ideal_stock_days,
        days_of_fba_stock=days_of_fba_stock,
        days_of_fbm_stock=days_of_fbm_stock,
        total_days_of_stock=total_days_of_stock,
        days_until_reorder=days_until_reorder,
        reorder_date=reorder_date,
        avg_daily_sales=velocity,
        ideal_stock_units=ideal_stock_units,
        current_stock_vs_ideal=current_stock_vs_ideal,
        units_to_order=units_to_order,
        excess_units=excess_units if status is ReorderStatus.OVERSTOCKED else None,
    )
