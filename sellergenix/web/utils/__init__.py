"""Web utilities."""

from __future__ import annotations

from sellergenix.web.utils.exporters import to_csv, to_xlsx

__all__ = ["to_csv", "to_xlsx"]
