"""Shopping suggestions derived from stock levels."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from pantry_planner.domain.catalog import DueType, Product
from pantry_planner.domain.shopping import ShoppingListItem
from pantry_planner.domain.stock import StockEntry, StockGap
from pantry_planner.services.due_scores import days_until
from pantry_planner.services.fulfillment import stock_by_product


def compute_below_min_stock(
    entries: Iterable[StockEntry], products: Sequence[Product]
) -> list[StockGap]:
    """Return products whose stock is below their minimum, with the gap."""
    stock = stock_by_product(entries)
    gaps: list[StockGap] = []
    for product in products:
        gap = _stock_gap(product, stock)
        if gap is not None:
            gaps.append(gap)
    return gaps


def compute_expired_products(
    entries: Iterable[StockEntry], products: Sequence[Product], today: date
) -> list[StockGap]:
    """Return the minimum stock gap of products holding an expired batch.

    A batch is expired once its date has passed and the product's date is an
    expiration date.
    """
    return _past_due_gaps(entries, products, today, DueType.EXPIRATION)


def compute_overdue_products(
    entries: Iterable[StockEntry], products: Sequence[Product], today: date
) -> list[StockGap]:
    """Return the minimum stock gap of products holding an overdue batch.

    A batch is overdue once its date has passed and the product's date is a
    best-before date.
    """
    return _past_due_gaps(entries, products, today, DueType.BEST_BEFORE)


def find_existing_item(
    items: Iterable[ShoppingListItem], product_id: str
) -> ShoppingListItem | None:
    """Return the open list item for a product, so a new add can top it up."""
    for item in items:
        if item.product_id == product_id and not item.done:
            return item
    return None


def _past_due_gaps(
    entries: Iterable[StockEntry],
    products: Sequence[Product],
    today: date,
    due_type: DueType,
) -> list[StockGap]:
    entries = list(entries)
    due_types = {product.id: product.due_type for product in products}
    past_due = {
        entry.product_id
        for entry in entries
        if entry.best_before_date is not None
        and days_until(entry.best_before_date, today) < 0
        and due_types.get(entry.product_id) == due_type
    }
    stock = stock_by_product(entries)
    gaps: list[StockGap] = []
    for product in products:
        if product.id not in past_due:
            continue
        gap = _stock_gap(product, stock)
        if gap is not None:
            gaps.append(gap)
    return gaps


def _stock_gap(product: Product, stock: Mapping[str, float]) -> StockGap | None:
    if product.min_stock_amount <= 0:
        return None
    missing = product.min_stock_amount - stock.get(product.id, 0.0)
    if missing <= 0:
        return None
    return StockGap(
        product_id=product.id,
        missing_amount=missing,
        qu_id=product.purchase_unit_id,
    )
