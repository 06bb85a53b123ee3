"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from datetime import date

import pytest

from sellergenix.core.config import get_settings
from sellergenix.services.inventory_planning import ProductInventory

AS_OF = date(2025, 1, 1)


@pytest.fixture
def as_of() -> date:
    """Fixed plan reference date."""
    return AS_OF


@pytest.fixture
def clean_settings_cache():
    """Reset cached settings around tests that touch the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def products() -> list[ProductInventory]:
    """Catalog covering every reorder status."""
    return [
        ProductInventory(
            product_id="p-safe",
            asin="B000SAFE01",
            sku="SAFE-001",
            title="Bamboo Cutting Board",
            fba_stock=300,
            avg_daily_sales=5,
            lead_time_days=10,
            reorder_point_days=5,
        ),
        ProductInventory(
            product_id="p-over",
            asin="B000OVER01",
            sku="OVER-001",
            title="Silicone Spatula Set",
            fba_stock=1000,
            avg_daily_sales=5,
            lead_time_days=10,
            reorder_point_days=7,
        ),
        ProductInventory(
            product_id="p-unknown",
            asin="B000UNKN01",
            title="New Launch Kettle",
            fba_stock=50,
            fbm_stock=20,
            lead_time_days=10,
            reorder_point_days=5,
        ),
        ProductInventory(
            product_id="p-critical",
            asin="B000CRIT01",
            sku="CRIT-001",
            title="Chef Knife",
            fba_stock=0,
            fbm_stock=0,
            avg_daily_sales=5,
            lead_time_days=10,
            reorder_point_days=7,
        ),
        ProductInventory(
            product_id="p-warning",
            asin="B000WARN01",
            sku="WARN-001",
            title="Measuring Cups",
            fba_stock=100,
            avg_daily_sales=10,
        ),
    ]
