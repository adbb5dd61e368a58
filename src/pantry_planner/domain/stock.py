"""Domain models for stock."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class StockEntry:
    """A batch of a product currently in stock."""

    product_id: str
    amount: float
    best_before_date: date | None = None
    location_id: str | None = None
    open: bool = False
    price: float | None = None


@dataclass(frozen=True)
class StockEntryDraft:
    """Stock entry prepared from a reconciled item, expressed in stock units."""

    source_index: int
    product_id: str
    amount: float
    price: float | None
    best_before_date: date | None
    location_id: str | None
    shopping_location_id: str | None
    note: str | None
    purchased_date: date


@dataclass(frozen=True)
class StockGap:
    """Amount needed to bring a product back to its minimum stock."""

    product_id: str
    missing_amount: float
    qu_id: str | None


class ExpiryStatus(str, Enum):
    """Freshness band of a stock entry."""

    FRESH = "fresh"
    WARNING = "warning"
    URGENT = "urgent"
    EXPIRED = "expired"
