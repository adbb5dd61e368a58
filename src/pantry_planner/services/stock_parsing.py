"""Stock parsing service: free text to reconciled stock items via a text model."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pantry_planner.domain.catalog import Catalog
from pantry_planner.domain.errors import ModelResponseError, ParseInputError
from pantry_planner.domain.parsing import ParsedStockItem
from pantry_planner.services.matching import DEFAULT_MATCH_THRESHOLD
from pantry_planner.services.reconciliation import parse_and_match_items

_NULLABLE_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}
_NULLABLE_NUMBER = {"anyOf": [{"type": "number"}, {"type": "null"}]}

STOCK_ITEMS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "product_name": {"type": "string"},
                    "product_id": _NULLABLE_STRING,
                    "amount": {"type": "number", "exclusiveMinimum": 0},
                    "unit_name": {"type": "string"},
                    "best_before_date": _NULLABLE_STRING,
                    "store_name": {"type": "string"},
                    "price": _NULLABLE_NUMBER,
                    "location_name": {"type": "string"},
                    "note": {"type": "string"},
                },
                "required": [
                    "product_name",
                    "product_id",
                    "amount",
                    "unit_name",
                    "best_before_date",
                    "store_name",
                    "price",
                    "location_name",
                    "note",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


class TextModelClient(Protocol):
    """Interface for the external text model."""

    async def complete(
        self,
        *,
        system_prompt: str,
        user_text: str,
        schema: dict[str, object],
    ) -> str:
        """Return the raw model answer for the user text."""


@dataclass
class StockParsingService:
    """Service that prompts the text model and reconciles its answer."""

    client: TextModelClient
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    max_input_chars: int = 500
    product_context_limit: int = 150
    debug: bool = False

    async def parse(
        self, text: str, catalog: Catalog, today: date
    ) -> list[ParsedStockItem]:
        """Parse natural language stock input into catalog-backed items."""
        cleaned = text.strip()
        if not cleaned:
            raise ParseInputError("text is required")
        if len(cleaned) > self.max_input_chars:
            raise ParseInputError(
                f"Input too long (max {self.max_input_chars} characters)"
            )

        prompt = build_system_prompt(catalog, today, self.product_context_limit)
        response = await self.client.complete(
            system_prompt=prompt,
            user_text=cleaned,
            schema=STOCK_ITEMS_SCHEMA,
        )
        if not response or not response.strip():
            raise ModelResponseError("Text model returned an empty response")
        if self.debug:
            _logger.info("Stock parse raw response: %s", response)

        items = parse_and_match_items(response, catalog, self.match_threshold)
        if self.debug:
            _logger.info(
                "Stock parse: items=%s matched=%s",
                len(items),
                sum(1 for item in items if item.product_id),
            )
        return items


def build_system_prompt(catalog: Catalog, today: date, product_limit: int = 150) -> str:
    """Describe the household catalog and output rules to the text model."""
    products = sorted(catalog.products, key=lambda product: product.name)[
        :product_limit
    ]
    product_ctx = (
        ", ".join(f"{product.name} [id:{product.id}]" for product in products)
        or "None"
    )
    unit_ctx = (
        ", ".join(
            f"{unit.name}/{unit.name_plural}" if unit.name_plural else unit.name
            for unit in catalog.units
        )
        or "piece"
    )
    store_ctx = ", ".join(store.name for store in catalog.stores) or "None"
    location_ctx = ", ".join(location.name for location in catalog.locations) or "None"
    return (
        "You are a kitchen inventory assistant. Parse the user's natural "
        "language input into structured stock entries.\n\n"
        "AVAILABLE DATA:\n"
        f"Products: {product_ctx}\n"
        f"Units: {unit_ctx}\n"
        f"Stores: {store_ctx}\n"
        f"Storage locations: {location_ctx}\n\n"
        f"TODAY'S DATE: {today.isoformat()}\n\n"
        "RULES:\n"
        '1. Return a JSON object with key "items" containing an array.\n'
        "2. Each item has product_name, product_id, amount, unit_name, "
        "best_before_date (YYYY-MM-DD or null), store_name, price (number or "
        "null), location_name and note.\n"
        "3. Split multiple items into separate entries.\n"
        "4. If a product closely matches an existing product, use its exact "
        "name and the [id:...] value.\n"
        "5. Do NOT invent product IDs. Only use IDs from the products list above.\n"
        '6. When unsure about a field, use null or "".\n'
        "7. For month names earlier than today, assume next year."
    )
