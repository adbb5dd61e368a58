"""Domain models for the meal plan."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MealPlanEntryType(str, Enum):
    """Kinds of meal plan entries."""

    RECIPE = "recipe"
    PRODUCT = "product"
    NOTE = "note"


@dataclass(frozen=True)
class MealPlanEntry:
    """A planned recipe, product or note on a given day."""

    day: date
    type: MealPlanEntryType
    recipe_id: str | None = None
    servings: float | None = None


@dataclass(frozen=True)
class AggregatedIngredient:
    """Deficit for a product/unit pair across the planned week."""

    product_id: str
    qu_id: str | None
    amount: float
