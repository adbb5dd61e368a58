"""Domain models for shopping lists."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShoppingListItem:
    """A line on a shopping list, linked to a product or holding a free note."""

    id: str
    amount: float
    product_id: str | None = None
    qu_id: str | None = None
    note: str | None = None
    done: bool = False
