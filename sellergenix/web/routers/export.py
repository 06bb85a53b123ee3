"""Export endpoints for CSV/XLSX downloads."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from sellergenix.core.logging import get_logger
from sellergenix.core.metrics import inventory_exports_total
from sellergenix.services.inventory_planning import (
    EXPORT_COLUMNS,
    export_rows,
    plan_products,
    summarize,
)
from sellergenix.web.deps import AppSettings, AsOf, Policy
from sellergenix.web.schemas import PlanBatchIn
from sellergenix.web.utils import to_csv, to_xlsx

log = get_logger("sellergenix.web.export")

router = APIRouter()


def check_export_limit(rows: int, max_rows: int) -> None:
    """Reject exports above the configured row limit.

    Raises:
        HTTPException: 413 if rows exceed max_rows

    """
    if rows > max_rows:
        raise HTTPException(
            status_code=413,
            detail=f"Export limit exceeded: {rows} rows requested, max {max_rows}",
        )


@router.post("/inventory.csv")
def export_inventory_csv(
    body: PlanBatchIn,
    as_of: AsOf,
    policy: Policy,
    settings: AppSettings,
) -> Response:
    """Export inventory reorder plans as CSV.

    Rows are sorted by urgency; null plan fields render as N/A.
    """
    check_export_limit(len(body.products), settings.export_max_rows)

    plans = plan_products(
        body.products, as_of=as_of, policy=policy, window_days=settings.velocity_window_days
    )
    csv_content = to_csv(export_rows(plans), EXPORT_COLUMNS)

    inventory_exports_total.labels(format="csv").inc()
    log.info("inventory_export", extra={"format": "csv", "rows": len(plans)})

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="inventory-{as_of.isoformat()}.csv"'
        },
    )


@router.post("/inventory.xlsx")
def export_inventory_xlsx(
    body: PlanBatchIn,
    as_of: AsOf,
    policy: Policy,
    settings: AppSettings,
) -> Response:
    """Export inventory reorder plans as XLSX.

    Sheet "Inventory Plan" holds one row per product, sheet "Summary" the
    status counts.
    """
    check_export_limit(len(body.products), settings.export_max_rows)

    plans = plan_products(
        body.products, as_of=as_of, policy=policy, window_days=settings.velocity_window_days
    )
    stats = summarize(plans)

    summary = {
        "Total Products": stats["total_products"],
        "Critical": stats["by_status"]["critical"],
        "Warning": stats["by_status"]["warning"],
        "Safe": stats["by_status"]["safe"],
        "Overstocked": stats["by_status"]["overstocked"],
        "Unknown": stats["by_status"]["unknown"],
        "Low Stock Count": stats["low_stock_count"],
        "Units To Order": stats["units_to_order"],
        "Plan Date": as_of.isoformat(),
    }
    xlsx_content = to_xlsx(
        export_rows(plans), EXPORT_COLUMNS, sheet_name="Inventory Plan", summary=summary
    )

    inventory_exports_total.labels(format="xlsx").inc()
    log.info("inventory_export", extra={"format": "xlsx", "rows": len(plans)})

    return Response(
        content=xlsx_content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f'attachment; filename="inventory-{as_of.isoformat()}.xlsx"'
        },
    )
