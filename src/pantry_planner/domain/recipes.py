"""Domain models for recipes and their fulfillment."""

from dataclasses import dataclass

from pantry_planner.domain.catalog import Product


@dataclass(frozen=True)
class Recipe:
    """Represents a recipe written for a number of base servings."""

    id: str
    name: str
    base_servings: float = 1.0
    produces_product_id: str | None = None


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient line of a recipe; amount is per base servings."""

    id: str
    recipe_id: str
    product_id: str | None
    amount: float
    unit_id: str | None = None
    skip_stock_check: bool = False
    variable_amount: str | None = None
    product: Product | None = None


@dataclass(frozen=True)
class IngredientFulfillment:
    """Stock check result for a single ingredient."""

    ingredient_id: str
    product_id: str | None
    needed: float
    in_stock: float
    missing: float
    fulfilled: bool
    skipped: bool


@dataclass(frozen=True)
class RecipeFulfillment:
    """Stock check result for a whole recipe."""

    can_make: bool
    ingredients: list[IngredientFulfillment]

    @property
    def missing_count(self) -> int:
        """Number of checked ingredients that are short."""
        return sum(
            1 for item in self.ingredients if not item.skipped and not item.fulfilled
        )


@dataclass(frozen=True)
class MissingIngredient:
    """Shortfall ready to be put on a shopping list."""

    product_id: str
    qu_id: str | None
    amount: float


@dataclass(frozen=True)
class RankedRecipe:
    """Recipe with its cookability and urgency."""

    recipe: Recipe
    can_make: bool
    missing_count: int
    due_score: float
