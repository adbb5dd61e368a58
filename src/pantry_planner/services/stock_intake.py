"""Prepare stock entries from reconciled items, in stock units."""

import logging
from collections.abc import Sequence
from datetime import date

from pantry_planner.domain.catalog import Catalog
from pantry_planner.domain.parsing import ParsedStockItem
from pantry_planner.domain.stock import StockEntryDraft
from pantry_planner.services.conversions import (
    resolve_factor,
    to_stock_amount,
    to_stock_unit_price,
)

_logger = logging.getLogger(__name__)


def prepare_stock_entries(
    items: Sequence[ParsedStockItem],
    catalog: Catalog,
    today: date,
    exclude_indices: set[int] | None = None,
) -> list[StockEntryDraft]:
    """Build stock entry drafts for every matched, non-excluded item.

    Amounts are converted from the purchase unit to the product's stock unit
    and the line price is stored per stock unit.
    """
    excluded = exclude_indices or set()
    drafts: list[StockEntryDraft] = []
    for index, item in enumerate(items):
        if item.product_id is None or index in excluded:
            continue
        product = catalog.product_by_id(item.product_id)
        if product is None:
            _logger.warning(
                "Skipping stock item with unknown product id: %s", item.product_id
            )
            continue

        factor = resolve_factor(
            product.id, item.qu_id, product.stock_unit_id, catalog.conversions
        )
        stock_amount = to_stock_amount(item.amount, factor)
        price = None
        if item.price is not None:
            price = to_stock_unit_price(item.price, stock_amount)

        drafts.append(
            StockEntryDraft(
                source_index=index,
                product_id=product.id,
                amount=stock_amount,
                price=price,
                best_before_date=item.best_before_date,
                location_id=item.location_id or product.location_id,
                shopping_location_id=(
                    item.shopping_location_id or product.shopping_location_id
                ),
                note=item.note or None,
                purchased_date=today,
            )
        )
    return drafts
