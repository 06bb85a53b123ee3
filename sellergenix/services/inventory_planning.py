"""Inventory planning service facade.

Every caller (settings preview, product list, spreadsheet export) plans
through this module so the reorder rules live in one place.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from sellergenix.core.logging import get_logger
from sellergenix.core.metrics import reorder_plans_computed_total
from sellergenix.domain.inventory.explain import generate_explanation, generate_hash
from sellergenix.domain.inventory.planner import (
    DEFAULT_POLICY,
    STATUS_PRIORITY,
    InventorySnapshot,
    ReorderPlan,
    ReorderPolicy,
    ReorderStatus,
    compute_reorder_plan,
)
from sellergenix.domain.inventory.velocity import DailyUnits, resolve_velocity

log = get_logger("sellergenix.services.inventory_planning")


class ProductInventory(BaseModel):
    """Product stock and planning settings as loaded from the product record."""

    product_id: str
    asin: str
    sku: str | None = None
    title: str | None = None
    marketplace: str = "US"
    fba_stock: int | None = 0
    fbm_stock: int | None = 0
    lead_time_days: int | None = Field(None, description="Days from production order to Amazon")
    avg_daily_sales: float | None = Field(None, description="Manual override of sales velocity")
    reorder_point_days: int | None = Field(None, description="Safety buffer days before reorder")
    daily_units: list[DailyUnits] = Field(default_factory=list, description="Sales history")

    @property
    def label(self) -> str:
        return self.sku or self.asin


@dataclass(frozen=True)
class ProductPlan:
    """Reorder plan for one product with its rationale."""

    product: ProductInventory
    snapshot: InventorySnapshot
    plan: ReorderPlan
    explanation: str
    rationale_hash: str


def snapshot_from_product(
    product: ProductInventory,
    *,
    as_of: date,
    window_days: int = 30,
) -> InventorySnapshot:
    """Build planner input from a product record.

    Missing stock/lead/buffer values count as 0. Velocity is the manual
    value when set, otherwise the trailing average of ``daily_units``.
    """
    velocity = resolve_velocity(
        product.avg_daily_sales,
        product.daily_units,
        window_days=window_days,
        as_of=as_of,
    )
    return InventorySnapshot(
        fba_stock=max(0, product.fba_stock or 0),
        fbm_stock=max(0, product.fbm_stock or 0),
        avg_daily_sales=velocity,
        lead_time_days=max(0, product.lead_time_days or 0),
        safety_buffer_days=max(0, product.reorder_point_days or 0),
    )


def plan_snapshot(
    snapshot: InventorySnapshot,
    *,
    as_of: date,
    policy: ReorderPolicy = DEFAULT_POLICY,
) -> ReorderPlan:
    """Compute plan for a bare snapshot (settings form live preview)."""
    plan = compute_reorder_plan(snapshot, as_of=as_of, policy=policy)
    reorder_plans_computed_total.labels(status=plan.reorder_status.value).inc()
    return plan


def plan_product(
    product: ProductInventory,
    *,
    as_of: date,
    policy: ReorderPolicy = DEFAULT_POLICY,
    window_days: int = 30,
) -> ProductPlan:
    """Compute reorder plan for one product."""
    snapshot = snapshot_from_product(product, as_of=as_of, window_days=window_days)
    plan = plan_snapshot(snapshot, as_of=as_of, policy=policy)

    return ProductPlan(
        product=product,
        snapshot=snapshot,
        plan=plan,
        explanation=generate_explanation(product.label, snapshot, plan),
        rationale_hash=generate_hash(snapshot, plan),
    )


def _urgency_key(item: ProductPlan) -> tuple[int, float, str]:
    days = item.plan.days_until_reorder
    return (
        STATUS_PRIORITY[item.plan.reorder_status],
        days if days is not None else float("inf"),
        item.product.asin,
    )


def plan_products(
    products: Iterable[ProductInventory],
    *,
    as_of: date,
    policy: ReorderPolicy = DEFAULT_POLICY,
    window_days: int = 30,
) -> list[ProductPlan]:
    """Compute plans for many products, most urgent first.

    Sort: status (critical, warning, safe, overstocked, unknown), then days
    until reorder ascending, then ASIN.
    """
    plans = [
        plan_product(p, as_of=as_of, policy=policy, window_days=window_days) for p in products
    ]
    plans.sort(key=_urgency_key)

    counts = Counter(p.plan.reorder_status.value for p in plans)
    log.info(
        "inventory_plans_computed",
        extra={"as_of": as_of.isoformat(), "products": len(plans), "by_status": dict(counts)},
    )

    return plans


def summarize(plans: Iterable[ProductPlan]) -> dict[str, Any]:
    """Aggregate plan list for dashboard badges and the export summary sheet."""
    by_status = {status.value: 0 for status in ReorderStatus}
    total_products = 0
    units_to_order = 0
    total_stock = 0

    for item in plans:
        total_products += 1
        by_status[item.plan.reorder_status.value] += 1
        total_stock += item.snapshot.fba_stock + item.snapshot.fbm_stock
        if item.plan.reorder_status in (ReorderStatus.CRITICAL, ReorderStatus.WARNING):
            units_to_order += item.plan.units_to_order or 0

    return {
        "total_products": total_products,
        "by_status": by_status,
        "low_stock_count": by_status["critical"] + by_status["warning"],
        "units_to_order": units_to_order,
        "total_stock_units": total_stock,
    }


EXPORT_COLUMNS = [
    "Product Title",
    "ASIN",
    "SKU",
    "Marketplace",
    "FBA Stock",
    "FBM Stock",
    "Days of Stock",
    "Avg Daily Sales",
    "Lead Time (Days)",
    "Safety Buffer (Days)",
    "Days Until Reorder",
    "Reorder Status",
    "Reorder Date",
    "Units To Order",
    "Stock vs Ideal (%)",
    "Recommendation",
]


def export_rows(plans: Iterable[ProductPlan]) -> list[dict[str, Any]]:
    """Flatten plans into spreadsheet rows (columns: EXPORT_COLUMNS)."""
    rows = []
    for item in plans:
        product, snapshot, plan = item.product, item.snapshot, item.plan
        rows.append(
            {
                "Product Title": product.title or "Untitled",
                "ASIN": product.asin,
                "SKU": product.sku or "",
                "Marketplace": product.marketplace,
                "FBA Stock": snapshot.fba_stock,
                "FBM Stock": snapshot.fbm_stock,
                "Days of Stock": _or_na(plan.total_days_of_stock),
                "Avg Daily Sales": (
                    plan.avg_daily_sales if plan.avg_daily_sales is not None else "Not Set"
                ),
                "Lead Time (Days)": snapshot.lead_time_days or "Not Set",
                "Safety Buffer (Days)": snapshot.safety_buffer_days,
                "Days Until Reorder": _or_na(plan.days_until_reorder),
                "Reorder Status": plan.reorder_status.value.upper(),
                "Reorder Date": plan.reorder_date.isoformat() if plan.reorder_date else "N/A",
                "Units To Order": _or_na(plan.units_to_order),
                "Stock vs Ideal (%)": _or_na(plan.current_stock_vs_ideal),
                "Recommendation": plan.order_recommendation,
            }
        )
    return rows


def _or_na(value: int | None) -> int | str:
    return value if value is not None else "N/A"
