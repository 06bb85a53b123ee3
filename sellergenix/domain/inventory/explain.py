"""Explainability for reorder planning decisions."""

from __future__ import annotations

import hashlib

from sellergenix.domain.inventory.planner import InventorySnapshot, ReorderPlan


def generate_explanation(label: str, snapshot: InventorySnapshot, plan: ReorderPlan) -> str:
    """Generate one-line rationale for a reorder plan.

    Args:
        label: Product label (ASIN or SKU)
        snapshot: Inputs the plan was computed from
        plan: Computed plan

    Returns:
        Explanation string

    """
    if plan.avg_daily_sales is None:
        return f"{label}: no sales velocity → {plan.reorder_status.value}"

    sv_display = f"sales={plan.avg_daily_sales:.2f}/day"
    stock_display = f"FBA={snapshot.fba_stock}, FBM={snapshot.fbm_stock}"
    cover_display = f"cover={plan.total_days_of_stock}d"
    lead_display = f"lead={snapshot.lead_time_days}d+{snapshot.safety_buffer_days}d"
    rec_display = f"order {plan.units_to_order}"

    return (
        f"{label}: {sv_display}, {stock_display}, {cover_display}, {lead_display} "
        f"→ {plan.reorder_status.value}, {rec_display}"
    )


def generate_hash(snapshot: InventorySnapshot, plan: ReorderPlan) -> str:
    """Generate deterministic hash for plan rationale.

    Hash based on: stock levels, velocity, lead time, buffer, status,
    reorder date and units to order.

    Returns:
        SHA256 hex digest

    """
    velocity = f"{plan.avg_daily_sales:.2f}" if plan.avg_daily_sales is not None else "-"
    reorder_date = plan.reorder_date.isoformat() if plan.reorder_date else "-"

    rationale_str = (
        f"{snapshot.fba_stock}|{snapshot.fbm_stock}|{velocity}|"
        f"{snapshot.lead_time_days}|{snapshot.safety_buffer_days}|"
        f"{plan.reorder_status.value}|{reorder_date}|{plan.units_to_order}"
    )

    return hashlib.sha256(rationale_str.encode()).hexdigest()
