"""Inventory overview: freshness bands and minimum stock gaps."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pantry_planner.domain.catalog import Product
from pantry_planner.domain.stock import ExpiryStatus, StockEntry, StockGap
from pantry_planner.services.due_scores import expiry_status
from pantry_planner.services.shopping import compute_below_min_stock


class InventoryRepository(Protocol):
    """Read interface for products and stock."""

    def list_products(self) -> list[Product]:
        """Return all active products of the household."""

    def list_stock_entries(self) -> list[StockEntry]:
        """Return all stock entries currently in stock."""


@dataclass
class InventoryService:
    """Service for stock freshness and shortfall views."""

    repository: InventoryRepository
    warning_days: int = 7
    urgent_days: int = 2

    def expiry_counts(self, today: date) -> dict[ExpiryStatus, int]:
        """Count stock entries per freshness band."""
        counts = dict.fromkeys(ExpiryStatus, 0)
        for entry in self.repository.list_stock_entries():
            status = expiry_status(
                entry.best_before_date,
                today,
                warning_days=self.warning_days,
                urgent_days=self.urgent_days,
            )
            counts[status] += 1
        return counts

    def expiring_entries(self, today: date) -> list[StockEntry]:
        """Return urgent and expired entries, soonest first."""
        flagged = [
            entry
            for entry in self.repository.list_stock_entries()
            if entry.best_before_date is not None
            and expiry_status(
                entry.best_before_date,
                today,
                warning_days=self.warning_days,
                urgent_days=self.urgent_days,
            )
            in {ExpiryStatus.URGENT, ExpiryStatus.EXPIRED}
        ]
        return sorted(flagged, key=lambda entry: entry.best_before_date or today)

    def below_min_stock(self) -> list[StockGap]:
        """Return products below their minimum stock amount."""
        return compute_below_min_stock(
            self.repository.list_stock_entries(), self.repository.list_products()
        )
