"""Recipe ranking by cookability and urgency."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from pantry_planner.domain.recipes import RankedRecipe, Recipe, RecipeIngredient
from pantry_planner.domain.stock import StockEntry
from pantry_planner.services.due_scores import compute_due_score
from pantry_planner.services.fulfillment import (
    compute_recipe_fulfillment,
    stock_by_product,
)

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Read interface for recipes and stock."""

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes of the household."""

    def list_ingredients(
        self, recipe_ids: set[str]
    ) -> dict[str, list[RecipeIngredient]]:
        """Return ingredients grouped by recipe id."""

    def list_stock_entries(self) -> list[StockEntry]:
        """Return all stock entries currently in stock."""


@dataclass
class RecipeService:
    """Service that lists recipes in "cook this first" order."""

    repository: RecipeRepository
    debug: bool = False

    def list_ranked(self, today: date) -> list[RankedRecipe]:
        """Return every recipe ranked by due score, then name."""
        recipes = self.repository.list_recipes()
        if not recipes:
            return []
        recipe_ids = {recipe.id for recipe in recipes}
        ingredients = self.repository.list_ingredients(recipe_ids)
        ranked = rank_recipes(
            recipes, ingredients, self.repository.list_stock_entries(), today
        )
        if self.debug:
            _logger.info(
                "Ranked recipes: total=%s cookable=%s",
                len(ranked),
                sum(1 for item in ranked if item.can_make),
            )
        return ranked


def rank_recipes(
    recipes: Sequence[Recipe],
    ingredients_by_recipe: Mapping[str, Sequence[RecipeIngredient]],
    stock_entries: Sequence[StockEntry],
    today: date,
) -> list[RankedRecipe]:
    """Pair each recipe's fulfillment at base servings with its due score."""
    stock = stock_by_product(stock_entries)
    ranked: list[RankedRecipe] = []
    for recipe in recipes:
        ingredients = ingredients_by_recipe.get(recipe.id, [])
        fulfillment = compute_recipe_fulfillment(
            ingredients, stock, recipe.base_servings, recipe.base_servings
        )
        ranked.append(
            RankedRecipe(
                recipe=recipe,
                can_make=fulfillment.can_make,
                missing_count=fulfillment.missing_count,
                due_score=compute_due_score(ingredients, stock_entries, today),
            )
        )
    return sorted(
        ranked,
        key=lambda item: (
            -item.due_score,
            item.recipe.name.casefold(),
            item.recipe.id,
        ),
    )
