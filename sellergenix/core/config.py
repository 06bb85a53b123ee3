"""Configuration management with pydantic-settings.

Provides type-safe configuration with environment variable validation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from sellergenix.domain.inventory.planner import ReorderPolicy


class Settings(BaseSettings):
    """Application settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application settings ===
    app_name: str = Field("SellerGenix API", description="Application name (OpenAPI title)")
    app_timezone: str = Field("UTC", description="Application timezone", validation_alias="TZ")
    log_level: str = Field("INFO", description="Root log level")
    log_file: str | None = Field(None, description="Path to JSON log file (None = stdout only)")

    # === Inventory planner policy (2.5x monthly rule) ===
    planner_ideal_stock_days: int = Field(75, ge=1, description="Ideal stock coverage (2.5 months)")
    planner_min_safe_stock_days: int = Field(
        45, ge=0, description="Minimum safe stock coverage (1.5 months)"
    )
    planner_overstocked_days: int = Field(
        120, ge=1, description="Coverage at which stock counts as overstocked (4 months)"
    )
    planner_critical_window_days: int = Field(
        7, ge=0, description="Days until reorder treated as critical"
    )
    planner_warning_window_days: int = Field(
        14, ge=0, description="Days until reorder treated as warning"
    )

    # === Sales velocity ===
    velocity_window_days: int = Field(
        30, ge=1, description="Trailing window for average daily sales"
    )

    # === Export ===
    export_max_rows: int = Field(100000, description="Maximum rows per export")

    # === AI chat routing ===
    ai_fast_model: str = Field("claude-haiku", description="Model for simple data lookups")
    ai_deep_model: str = Field("claude-opus", description="Model for complex analysis")
    ai_long_query_chars: int = Field(
        200, description="Queries longer than this go to the deep model"
    )

    def reorder_policy(self) -> ReorderPolicy:
        """Build planner policy from configured thresholds."""
        from sellergenix.domain.inventory.planner import ReorderPolicy

        return ReorderPolicy(
            ideal_stock_days=self.planner_ideal_stock_days,
            minimum_safe_stock_days=self.planner_min_safe_stock_days,
            overstocked_threshold_days=self.planner_overstocked_days,
            critical_window_days=self.planner_critical_window_days,
            warning_window_days=self.planner_warning_window_days,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        RuntimeError: If environment variables fail validation.

    """
    try:
        return Settings()
    except ValidationError as e:
        bad_fields = []
        for error in e.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "?"
            bad_fields.append(field_name.upper())

        error_msg = (
            f"Configuration error: invalid environment variables: "
            f"{', '.join(bad_fields)}\n"
            f"Please fix them in .env file or the process environment.\n"
            f"See .env.example for reference."
        )
        raise RuntimeError(error_msg) from e


__all__ = ["Settings", "get_settings"]
