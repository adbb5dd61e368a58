"""Meal plan aggregation: weekly deficits and daily calories."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from pantry_planner.domain.meal_plan import (
    AggregatedIngredient,
    MealPlanEntry,
    MealPlanEntryType,
)
from pantry_planner.domain.recipes import Recipe, RecipeIngredient
from pantry_planner.domain.stock import StockEntry
from pantry_planner.services.fulfillment import (
    is_excluded,
    servings_scale,
    stock_by_product,
)

DAYS_PER_WEEK = 7

_logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Read interface for meal plan data."""

    def list_entries(self, start: date, end: date) -> list[MealPlanEntry]:
        """Return entries with start <= day < end."""

    def get_recipes(self, recipe_ids: set[str]) -> list[Recipe]:
        """Return recipes by id."""

    def list_ingredients(
        self, recipe_ids: set[str]
    ) -> dict[str, list[RecipeIngredient]]:
        """Return ingredients grouped by recipe id."""

    def list_stock_entries(self) -> list[StockEntry]:
        """Return all stock entries currently in stock."""

    def get_kcal_per_serving(self, recipe_ids: set[str]) -> dict[str, float]:
        """Return calories per serving for recipes that have nutrition data."""


@dataclass
class MealPlanService:
    """Service for week-level meal plan summaries."""

    repository: MealPlanRepository
    debug: bool = False

    def week_missing_ingredients(self, week_start: date) -> list[AggregatedIngredient]:
        """Return what must be bought to cook every recipe planned this week."""
        entries = self.repository.list_entries(
            week_start, week_start + timedelta(days=DAYS_PER_WEEK)
        )
        recipe_ids = _recipe_ids(entries)
        if not recipe_ids:
            return []
        recipes = self.repository.get_recipes(recipe_ids)
        missing = aggregate_week_ingredients(
            entries,
            self.repository.list_ingredients(recipe_ids),
            stock_by_product(self.repository.list_stock_entries()),
            {recipe.id: recipe.base_servings for recipe in recipes},
        )
        if self.debug:
            _logger.info(
                "Week deficits: week_start=%s recipes=%s lines=%s",
                week_start,
                len(recipe_ids),
                len(missing),
            )
        return missing

    def daily_kcal(self, day: date) -> float:
        """Return planned calories for a single day."""
        entries = self.repository.list_entries(day, day + timedelta(days=1))
        recipe_ids = _recipe_ids(entries)
        if not recipe_ids:
            return 0.0
        return compute_daily_nutrition(
            entries, self.repository.get_kcal_per_serving(recipe_ids)
        )

    def weekly_kcal(self, week_start: date) -> dict[date, float]:
        """Return planned calories for each day of the week."""
        end = week_start + timedelta(days=DAYS_PER_WEEK)
        entries = self.repository.list_entries(week_start, end)
        kcal_map = self.repository.get_kcal_per_serving(_recipe_ids(entries))
        totals: dict[date, float] = {}
        for offset in range(DAYS_PER_WEEK):
            day = week_start + timedelta(days=offset)
            day_entries = [entry for entry in entries if entry.day == day]
            totals[day] = compute_daily_nutrition(day_entries, kcal_map)
        return totals


def aggregate_week_ingredients(
    entries: Iterable[MealPlanEntry],
    ingredients_by_recipe: Mapping[str, Sequence[RecipeIngredient]],
    stock: Mapping[str, float],
    base_servings_by_recipe: Mapping[str, float],
) -> list[AggregatedIngredient]:
    """Consolidate scaled ingredient needs for the week and net them against stock.

    Requirements are keyed by (product id, unit id); the same product in two
    units stays on two lines. A product's stock is applied once, to its lines
    in the order they were first seen, until it runs out. Only positive
    deficits are returned, ordered by product id.
    """
    totals: dict[tuple[str, str | None], float] = {}
    for entry in entries:
        if entry.type != MealPlanEntryType.RECIPE or not entry.recipe_id:
            continue
        base = base_servings_by_recipe.get(entry.recipe_id, 1.0)
        scale = servings_scale(base, entry.servings)

        for ingredient in ingredients_by_recipe.get(entry.recipe_id, []):
            if is_excluded(ingredient):
                continue
            key = (ingredient.product_id, ingredient.unit_id)
            scaled = max(ingredient.amount, 0.0) * scale
            totals[key] = totals.get(key, 0.0) + scaled

    remaining_stock: dict[str, float] = {}
    missing: list[AggregatedIngredient] = []
    for (product_id, qu_id), amount in totals.items():
        available = remaining_stock.get(product_id, stock.get(product_id, 0.0))
        deficit = amount - max(available, 0.0)
        if deficit > 0:
            remaining_stock[product_id] = 0.0
            missing.append(
                AggregatedIngredient(product_id=product_id, qu_id=qu_id, amount=deficit)
            )
        else:
            remaining_stock[product_id] = available - amount
    return sorted(missing, key=lambda item: item.product_id)


def compute_daily_nutrition(
    entries: Iterable[MealPlanEntry],
    kcal_per_serving_by_recipe: Mapping[str, float],
) -> float:
    """Sum calories of the recipe entries of a day."""
    total = 0.0
    for entry in entries:
        if entry.type != MealPlanEntryType.RECIPE or not entry.recipe_id:
            continue
        kcal = kcal_per_serving_by_recipe.get(entry.recipe_id)
        if kcal is None:
            continue
        servings = entry.servings if entry.servings is not None else 1.0
        total += kcal * max(servings, 0.0)
    return total


def _recipe_ids(entries: Iterable[MealPlanEntry]) -> set[str]:
    return {
        entry.recipe_id
        for entry in entries
        if entry.type == MealPlanEntryType.RECIPE and entry.recipe_id
    }
