"""Tests for inventory reorder planner."""

from __future__ import annotations

import math
from datetime import date, timedelta

import pytest

from sellergenix.domain.inventory.planner import (
    DEFAULT_POLICY,
    MAX_STOCK_DAYS,
    MAX_UNITS,
    NO_SALES_DATA_MESSAGE,
    InventorySnapshot,
    ReorderPolicy,
    ReorderStatus,
    classify_status,
    compute_reorder_plan,
    round_half_up,
)

AS_OF = date(2025, 1, 1)

NUMERIC_FIELDS = (
    "days_of_fba_stock",
    "days_of_fbm_stock",
    "total_days_of_stock",
    "days_until_reorder",
    "reorder_date",
    "avg_daily_sales",
    "ideal_stock_units",
    "current_stock_vs_ideal",
    "units_to_order",
)

RANK = {
    ReorderStatus.CRITICAL: 0,
    ReorderStatus.WARNING: 1,
    ReorderStatus.SAFE: 2,
    ReorderStatus.OVERSTOCKED: 3,
}


def plan_for(fba=0, fbm=0, sales=1.0, lead=0, buffer=0, policy=DEFAULT_POLICY):
    snapshot = InventorySnapshot(
        fba_stock=fba,
        fbm_stock=fbm,
        avg_daily_sales=sales,
        lead_time_days=lead,
        safety_buffer_days=buffer,
    )
    return compute_reorder_plan(snapshot, as_of=AS_OF, policy=policy)


def test_empty_stock_is_critical_order_now():
    """No stock, 10d lead + 7d buffer → overdue by 17 days."""
    plan = plan_for(fba=0, fbm=0, sales=5, lead=10, buffer=7)

    assert plan.total_days_of_stock == 0
    assert plan.days_until_reorder == -17
    assert plan.reorder_status is ReorderStatus.CRITICAL
    # ceil(75*5 - (0 - 5*10)) = 425
    assert plan.units_to_order == 425
    assert plan.reorder_date == date(2024, 12, 15)
    assert plan.order_recommendation.startswith("ORDER NOW! You need 425 units")


def test_large_stock_is_overstocked():
    """1000 units at 5/day = 200 days → overstocked by 625 units."""
    plan = plan_for(fba=1000, sales=5, lead=10, buffer=7)

    assert plan.total_days_of_stock == 200
    assert plan.reorder_status is ReorderStatus.OVERSTOCKED
    assert plan.excess_units == 625
    assert plan.units_to_order == 0
    assert plan.current_stock_vs_ideal == 267
    assert "Overstocked by 625 units (200 days)" in plan.order_recommendation
    assert "promotions" in plan.order_recommendation


def test_adequate_stock_below_ideal_is_safe():
    """60 days of stock, 45 until reorder → safe, but below 75-day ideal."""
    plan = plan_for(fba=300, sales=5, lead=10, buffer=5)

    assert plan.total_days_of_stock == 60
    assert plan.days_until_reorder == 45
    assert plan.reorder_status is ReorderStatus.SAFE
    assert plan.units_to_order == 125  # ceil(375 - (300 - 50))
    assert plan.reorder_date == AS_OF + timedelta(days=45)
    assert plan.order_recommendation == (
        "Stock OK (60 days). Order 125 units by 2025-02-15 to reach ideal 75-day stock."
    )


def test_missing_velocity_gives_unknown():
    """No sales velocity → all numeric fields null."""
    plan = plan_for(fba=50, fbm=20, sales=None, lead=10, buffer=5)

    assert plan.reorder_status is ReorderStatus.UNKNOWN
    assert plan.order_recommendation == NO_SALES_DATA_MESSAGE
    for name in NUMERIC_FIELDS:
        assert getattr(plan, name) is None, name
    assert plan.ideal_stock_days == 75


def test_ten_days_of_stock_no_lead_time_is_warning():
    """10 days until reorder falls in the 14-day warning band."""
    plan = plan_for(fba=100, sales=10)

    assert plan.total_days_of_stock == 10
    assert plan.days_until_reorder == 10
    assert plan.reorder_status is ReorderStatus.WARNING
    assert plan.reorder_date == date(2025, 1, 11)
    assert "by 2025-01-11" in plan.order_recommendation


@pytest.mark.parametrize("sales", [None, 0, 0.0, -3.5, float("nan"), float("inf")])
def test_unusable_velocity_never_divides(sales):
    """Zero, negative or non-finite velocity → unknown plan."""
    plan = plan_for(fba=100, fbm=10, sales=sales, lead=5)

    assert plan.reorder_status is ReorderStatus.UNKNOWN
    assert all(getattr(plan, name) is None for name in NUMERIC_FIELDS)


def test_fbm_stock_adds_days():
    """FBA and FBM days are rounded separately and summed."""
    plan = plan_for(fba=100, fbm=50, sales=10)

    assert plan.days_of_fba_stock == 10
    assert plan.days_of_fbm_stock == 5
    assert plan.total_days_of_stock == 15


def test_days_round_half_up():
    """2.5 days → 3, 1.5 days → 2 (not banker's rounding)."""
    plan = plan_for(fba=5, fbm=3, sales=2)

    assert plan.days_of_fba_stock == 3
    assert plan.days_of_fbm_stock == 2
    assert plan.total_days_of_stock == 5


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(266.666) == 267


@pytest.mark.parametrize(
    ("fba", "status", "fragment"),
    [
        (0, ReorderStatus.CRITICAL, "ORDER NOW!"),
        (7, ReorderStatus.CRITICAL, "within 7 days"),
        (8, ReorderStatus.WARNING, "to maintain optimal stock levels"),
        (14, ReorderStatus.WARNING, "to maintain optimal stock levels"),
        (15, ReorderStatus.WARNING, "below recommended 45-day minimum"),
        (44, ReorderStatus.WARNING, "below recommended 45-day minimum"),
        (45, ReorderStatus.SAFE, "Stock OK (45 days)"),
        (75, ReorderStatus.SAFE, "Stock levels optimal (75 days)"),
        (119, ReorderStatus.SAFE, "Stock levels optimal (119 days)"),
        (120, ReorderStatus.OVERSTOCKED, "Overstocked by 45 units (120 days)"),
    ],
)
def test_status_thresholds(fba, status, fragment):
    """1 unit/day, no lead time: days of stock == units == days until reorder."""
    plan = plan_for(fba=fba, sales=1)

    assert plan.reorder_status is status
    assert fragment in plan.order_recommendation


def test_overstocked_wins_over_reorder_countdown():
    """Huge stock with a very long lead time is still overstocked, not critical."""
    plan = plan_for(fba=200, sales=1, lead=195, buffer=10)

    assert plan.days_until_reorder < 0
    assert plan.reorder_status is ReorderStatus.OVERSTOCKED


def test_negative_inputs_are_clamped():
    """Negative stock/lead/buffer count as zero."""
    clamped = plan_for(fba=-10, fbm=-5, sales=5, lead=-3, buffer=-1)
    zero = plan_for(fba=0, fbm=0, sales=5, lead=0, buffer=0)

    assert clamped == zero
    assert clamped.units_to_order == 375


def test_total_days_is_sum_of_parts():
    for fba in range(0, 400, 37):
        for fbm in range(0, 200, 23):
            plan = plan_for(fba=fba, fbm=fbm, sales=3.7, lead=12, buffer=4)
            assert plan.total_days_of_stock == plan.days_of_fba_stock + plan.days_of_fbm_stock
            assert plan.units_to_order >= 0


def test_status_never_gets_more_urgent_as_stock_grows():
    """Adding stock only moves status towards overstocked."""
    previous = None
    for fba in range(0, 400):
        plan = plan_for(fba=fba, sales=2, lead=10, buffer=5)
        rank = RANK[plan.reorder_status]
        if previous is not None:
            assert rank >= previous, f"status regressed at fba={fba}"
        previous = rank


def test_same_input_same_output():
    """Pure: identical snapshot and date give identical plans."""
    first = plan_for(fba=321, fbm=45, sales=4.2, lead=21, buffer=7)
    second = plan_for(fba=321, fbm=45, sales=4.2, lead=21, buffer=7)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_reorder_date_follows_as_of():
    snapshot = InventorySnapshot(fba_stock=100, avg_daily_sales=10)

    jan = compute_reorder_plan(snapshot, as_of=date(2025, 1, 1))
    feb = compute_reorder_plan(snapshot, as_of=date(2025, 2, 1))

    assert jan.reorder_date == date(2025, 1, 11)
    assert feb.reorder_date == date(2025, 2, 11)


def test_ideal_stock_and_units_to_order_with_fractional_velocity():
    plan = plan_for(fba=40, fbm=10, sales=2.2, lead=20)

    assert plan.ideal_stock_units == math.ceil(2.2 * 75)
    # stock after lead time = 50 - 44 = 6
    assert plan.units_to_order == math.ceil(plan.ideal_stock_units - (50 - 2.2 * 20))


def test_custom_policy():
    """Thresholds come from the policy, not module constants."""
    policy = ReorderPolicy(
        ideal_stock_days=60,
        minimum_safe_stock_days=30,
        overstocked_threshold_days=90,
    )

    assert plan_for(fba=90, sales=1, policy=policy).reorder_status is ReorderStatus.OVERSTOCKED
    assert plan_for(fba=90, sales=1).reorder_status is ReorderStatus.SAFE

    below_min = plan_for(fba=20, sales=1, policy=policy)
    assert below_min.reorder_status is ReorderStatus.WARNING
    assert "30-day minimum" in below_min.order_recommendation
    assert "ideal 60-day stock" in below_min.order_recommendation
    assert below_min.ideal_stock_units == 60


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ideal_stock_days": 0},
        {"overstocked_threshold_days": -1},
        {"minimum_safe_stock_days": -5},
        {"critical_window_days": 20, "warning_window_days": 14},
    ],
)
def test_invalid_policy_rejected(kwargs):
    with pytest.raises(ValueError):
        ReorderPolicy(**kwargs)


def test_classify_status_order():
    assert classify_status(130, -5) is ReorderStatus.OVERSTOCKED
    assert classify_status(10, 0) is ReorderStatus.CRITICAL
    assert classify_status(20, 3) is ReorderStatus.CRITICAL
    assert classify_status(20, 12) is ReorderStatus.WARNING
    assert classify_status(40, 30) is ReorderStatus.WARNING
    assert classify_status(60, 30) is ReorderStatus.SAFE


def test_to_dict_uses_iso_date_and_plain_status():
    data = plan_for(fba=100, sales=10).to_dict()

    assert data["reorder_status"] == "warning"
    assert data["reorder_date"] == "2025-01-11"
    assert data["units_to_order"] == 650


def test_unknown_to_dict():
    data = plan_for(sales=None).to_dict()

    assert data["reorder_status"] == "unknown"
    assert data["reorder_date"] is None


def test_slow_mover_days_capped():
    """30000 units at 0.01/day would be 3M days; capped, still a valid date."""
    plan = plan_for(fba=30000, sales=0.01)

    assert plan.days_of_fba_stock == MAX_STOCK_DAYS
    assert plan.total_days_of_stock == MAX_STOCK_DAYS
    assert plan.reorder_status is ReorderStatus.OVERSTOCKED
    assert plan.reorder_date == AS_OF + timedelta(days=MAX_STOCK_DAYS)


def test_denormal_velocity_does_not_overflow():
    """1 / 1e-310 is inf as a float."""
    plan = plan_for(fba=1, fbm=1, sales=1e-310)

    assert plan.days_of_fba_stock == MAX_STOCK_DAYS
    assert plan.days_of_fbm_stock == MAX_STOCK_DAYS
    assert plan.reorder_status is ReorderStatus.OVERSTOCKED
    assert plan.ideal_stock_units == 1


def test_huge_velocity_saturates_units():
    plan = plan_for(fba=10, sales=1e308, lead=30)

    assert plan.reorder_status is ReorderStatus.CRITICAL
    assert plan.ideal_stock_units == MAX_UNITS
    assert plan.units_to_order == MAX_UNITS


def test_huge_lead_time_is_clamped():
    plan = plan_for(fba=10, sales=1, lead=10**12, buffer=10**12)

    assert plan.days_until_reorder == 10 - 2 * MAX_STOCK_DAYS
    assert plan.reorder_status is ReorderStatus.CRITICAL


def test_huge_stock_is_clamped():
    plan = plan_for(fba=10**30, fbm=10**30, sales=1)

    assert plan.total_days_of_stock == 2 * MAX_STOCK_DAYS
    assert plan.excess_units == 2 * MAX_UNITS - 75


@pytest.mark.parametrize(
    ("as_of", "fba", "lead", "expected"),
    [
        (date(1, 1, 10), 0, 30_000, date.min),
        (date(9999, 12, 1), 30_000, 0, date.max),
    ],
)
def test_reorder_date_saturates_at_date_range(as_of, fba, lead, expected):
    snapshot = InventorySnapshot(fba_stock=fba, avg_daily_sales=1, lead_time_days=lead)

    plan = compute_reorder_plan(snapshot, as_of=as_of)

    assert plan.reorder_date == expected
    assert plan.to_dict()["reorder_date"] == expected.isoformat()


def test_policy_thresholds_bounded():
    with pytest.raises(ValueError):
        ReorderPolicy(overstocked_threshold_days=MAX_STOCK_DAYS + 1)
