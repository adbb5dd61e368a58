"""Reconcile text model output against the household catalog."""

import json
import logging
import re

from pydantic import ValidationError

from pantry_planner.domain.catalog import Catalog, QuantityUnit
from pantry_planner.domain.parsing import ParsedStockItem, RawStockItem
from pantry_planner.services.matching import (
    DEFAULT_MATCH_THRESHOLD,
    EXACT_SCORE,
    MatchResult,
    find_best_match,
    normalize_label,
)

_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_START = re.compile(r"[{\[]")

_logger = logging.getLogger(__name__)


def extract_raw_items(response: str) -> list[object]:
    """Pull the list of item objects out of a model response.

    Accepts a JSON object with an ``items`` list, a bare JSON list, an object
    whose first non-empty list value holds the items, JSON inside a fenced
    code block, or JSON starting at the first brace or bracket.
    """
    parsed = _load_json(response)
    if parsed is not None:
        items = _items_from(parsed)
        if items is not None:
            return items
        if isinstance(parsed, dict):
            for value in parsed.values():
                if isinstance(value, list) and value:
                    return value

    fence = _FENCE.search(response)
    if fence:
        items = _items_from(_load_json(fence.group(1)))
        if items is not None:
            return items

    start = _JSON_START.search(response)
    if start:
        items = _items_from(_load_json_prefix(response[start.start() :]))
        if items is not None:
            return items
    return []


def unit_label(unit: QuantityUnit) -> str:
    """Label a unit is matched by: its name plus plural, if any."""
    if unit.name_plural:
        return f"{unit.name} {unit.name_plural}"
    return unit.name


def match_unit(
    query: str,
    units: list[QuantityUnit],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> MatchResult[QuantityUnit] | None:
    """Match a unit by exact singular or plural name, then by its label."""
    wanted = normalize_label(query)
    if not wanted:
        return None
    for unit in units:
        names = (unit.name, unit.name_plural or "")
        if wanted in {normalize_label(name) for name in names}:
            return MatchResult(item=unit, score=EXACT_SCORE)
    return find_best_match(query, units, unit_label, threshold)


def verify_product_id(product_id: str | None, catalog: Catalog) -> str | None:
    """Keep an untrusted product id only if the catalog knows it."""
    if product_id is None:
        return None
    if catalog.product_by_id(product_id) is None:
        _logger.warning("Discarding unknown product id from model: %s", product_id)
        return None
    return product_id


def reconcile_item(
    raw: RawStockItem,
    catalog: Catalog,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> ParsedStockItem:
    """Turn one raw model item into catalog-backed references."""
    product_id = verify_product_id(raw.product_id, catalog)
    if product_id is None and raw.product_name:
        match = find_best_match(
            raw.product_name, catalog.products, lambda p: p.name, threshold
        )
        if match:
            product_id = match.item.id

    qu_id = None
    if raw.unit_name:
        unit_match = match_unit(raw.unit_name, catalog.units, threshold)
        if unit_match:
            qu_id = unit_match.item.id

    shopping_location_id = None
    if raw.store_name:
        store_match = find_best_match(
            raw.store_name, catalog.stores, lambda s: s.name, threshold
        )
        if store_match:
            shopping_location_id = store_match.item.id

    location_id = None
    if raw.location_name:
        location_match = find_best_match(
            raw.location_name, catalog.locations, lambda loc: loc.name, threshold
        )
        if location_match:
            location_id = location_match.item.id

    product = catalog.product_by_id(product_id)
    return ParsedStockItem(
        raw=raw.product_name,
        product_id=product_id,
        product_name=product.name if product else raw.product_name,
        amount=raw.amount,
        qu_id=qu_id,
        unit_name=raw.unit_name,
        best_before_date=raw.best_before_date,
        shopping_location_id=shopping_location_id,
        store_name=raw.store_name,
        price=raw.price,
        location_id=location_id,
        location_name=raw.location_name,
        note=raw.note,
    )


def parse_and_match_items(
    response: str,
    catalog: Catalog,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> list[ParsedStockItem]:
    """Parse a model response and reconcile every item against the catalog."""
    parsed: list[ParsedStockItem] = []
    for raw in extract_raw_items(response):
        if not isinstance(raw, dict):
            _logger.warning("Skipping non-object item from model: %r", raw)
            continue
        try:
            item = RawStockItem.model_validate(raw)
        except ValidationError:
            _logger.warning("Skipping malformed item from model: %r", raw)
            continue
        parsed.append(reconcile_item(item, catalog, threshold))
    return parsed


def _load_json(text: str) -> object | None:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _load_json_prefix(text: str) -> object | None:
    try:
        value, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError:
        return None
    return value


def _items_from(parsed: object) -> list[object] | None:
    if isinstance(parsed, dict) and isinstance(parsed.get("items"), list):
        return parsed["items"]
    if isinstance(parsed, list):
        return parsed
    return None
