"""Domain models for the household catalog."""

from dataclasses import dataclass, field
from enum import Enum


class DueType(int, Enum):
    """How a product's date is read once it has passed."""

    BEST_BEFORE = 1
    EXPIRATION = 2


@dataclass(frozen=True)
class Product:
    """Represents a product known to the household."""

    id: str
    name: str
    stock_unit_id: str | None = None
    purchase_unit_id: str | None = None
    exclude_from_recipe_fulfillment: bool = False
    min_stock_amount: float = 0.0
    location_id: str | None = None
    shopping_location_id: str | None = None
    due_type: DueType = DueType.BEST_BEFORE


@dataclass(frozen=True)
class QuantityUnit:
    """Represents a quantity unit such as g, kg or can."""

    id: str
    name: str
    name_plural: str | None = None


@dataclass(frozen=True)
class UnitConversion:
    """Directional conversion; a null product id marks a global row."""

    product_id: str | None
    from_unit_id: str
    to_unit_id: str
    factor: float


@dataclass(frozen=True)
class NamedEntry:
    """A store or storage location with an id and a display name."""

    id: str
    name: str


@dataclass(frozen=True)
class Catalog:
    """Household-scoped catalog used to reconcile free text."""

    products: list[Product] = field(default_factory=list)
    units: list[QuantityUnit] = field(default_factory=list)
    stores: list[NamedEntry] = field(default_factory=list)
    locations: list[NamedEntry] = field(default_factory=list)
    conversions: list[UnitConversion] = field(default_factory=list)

    def product_by_id(self, product_id: str | None) -> Product | None:
        """Return the product with the given id, if it exists."""
        if product_id is None:
            return None
        for product in self.products:
            if product.id == product_id:
                return product
        return None
