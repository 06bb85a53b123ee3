"""Inventory planning API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from sellergenix.domain.inventory.planner import InventorySnapshot
from sellergenix.services.inventory_planning import plan_products, plan_snapshot, summarize
from sellergenix.web.deps import AppSettings, AsOf, Policy
from sellergenix.web.schemas import (
    PlanBatchIn,
    PlanBatchOut,
    ProductPlanRow,
    ReorderPlanOut,
    SnapshotIn,
    StatusSummary,
)

router = APIRouter()


@router.post("/preview", response_model=ReorderPlanOut)
def preview_reorder_plan(body: SnapshotIn, as_of: AsOf, policy: Policy) -> ReorderPlanOut:
    """Compute reorder plan for inventory settings form values.

    Called on every field edit of the settings form; pure and side-effect free.
    """
    snapshot = InventorySnapshot(
        fba_stock=body.fba_stock,
        fbm_stock=body.fbm_stock,
        avg_daily_sales=body.avg_daily_sales,
        lead_time_days=body.lead_time_days,
        safety_buffer_days=body.safety_buffer_days,
    )
    plan = plan_snapshot(snapshot, as_of=as_of, policy=policy)
    return ReorderPlanOut.model_validate(plan.to_dict())


@router.post("/plan", response_model=PlanBatchOut)
def plan_inventory(
    body: PlanBatchIn,
    as_of: AsOf,
    policy: Policy,
    settings: AppSettings,
) -> PlanBatchOut:
    """Compute reorder plans for a product list.

    Returns products sorted by urgency (critical first) with status counts.
    """
    plans = plan_products(
        body.products,
        as_of=as_of,
        policy=policy,
        window_days=settings.velocity_window_days,
    )

    items = [
        ProductPlanRow(
            product_id=p.product.product_id,
            asin=p.product.asin,
            sku=p.product.sku,
            title=p.product.title,
            marketplace=p.product.marketplace,
            plan=ReorderPlanOut.model_validate(p.plan.to_dict()),
            explain=p.explanation,
            rationale_hash=p.rationale_hash,
        )
        for p in plans
    ]

    return PlanBatchOut(as_of=as_of, items=items, summary=StatusSummary(**summarize(plans)))
