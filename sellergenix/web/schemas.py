"""Pydantic schemas for API requests and responses."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from sellergenix.services.inventory_planning import ProductInventory


# Inventory planning schemas
class SnapshotIn(BaseModel):
    """Inventory settings form values for live preview."""

    fba_stock: int = Field(0, description="Units at Amazon fulfillment centers")
    fbm_stock: int = Field(0, description="Units in merchant storage")
    avg_daily_sales: float | None = Field(None, description="Units sold per day; null = unknown")
    lead_time_days: int = Field(0, description="Days from reorder to stock at Amazon")
    safety_buffer_days: int = Field(0, description="Extra cushion before reorder point")


class ReorderPlanOut(BaseModel):
    """Reorder plan. All numeric fields are null when sales velocity is unknown."""

    model_config = ConfigDict(from_attributes=True)

    reorder_status: str
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


class ProductPlanRow(BaseModel):
    """Product list row with reorder plan and rationale."""

    product_id: str
    asin: str
    sku: str | None = None
    title: str | None = None
    marketplace: str
    plan: ReorderPlanOut
    explain: str | None = Field(None, description="Human-readable rationale")
    rationale_hash: str


class StatusSummary(BaseModel):
    """Plan counts for dashboard badges."""

    total_products: int
    by_status: dict[str, int]
    low_stock_count: int
    units_to_order: int
    total_stock_units: int


class PlanBatchIn(BaseModel):
    """Products to plan."""

    products: list[ProductInventory] = Field(..., description="Products with stock data")


class PlanBatchOut(BaseModel):
    """Plans sorted by urgency, with summary."""

    as_of: date
    items: list[ProductPlanRow]
    summary: StatusSummary


# AI routing schemas
class QueryIn(BaseModel):
    """Dashboard chat question."""

    query: str = Field(..., min_length=1, max_length=4000)


class QueryRouteOut(BaseModel):
    """Model routing decision."""

    tier: str
    model: str
    confidence: float
    reason: str
