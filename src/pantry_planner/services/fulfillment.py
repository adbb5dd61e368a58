"""Recipe fulfillment: can a recipe be cooked from current stock."""

from collections.abc import Iterable, Mapping, Sequence

from pantry_planner.domain.recipes import (
    IngredientFulfillment,
    MissingIngredient,
    RecipeFulfillment,
    RecipeIngredient,
)
from pantry_planner.domain.stock import StockEntry


def is_excluded(ingredient: RecipeIngredient) -> bool:
    """Return True when an ingredient takes no part in stock arithmetic."""
    if ingredient.skip_stock_check:
        return True
    if not ingredient.product_id:
        return True
    product = ingredient.product
    if product is not None and product.exclude_from_recipe_fulfillment:
        return True
    return bool(ingredient.variable_amount)


def servings_scale(base_servings: float, desired_servings: float | None) -> float:
    """Return desired / base servings, or 1 when either is unusable.

    Negative desired servings clamp to a zero scale.
    """
    if desired_servings is None or base_servings <= 0:
        return 1.0
    return max(desired_servings / base_servings, 0.0)


def scale_amount(amount: float, base_servings: float, desired_servings: float) -> float:
    """Scale an ingredient amount from base servings to desired servings."""
    return amount * servings_scale(base_servings, desired_servings)


def format_scaled_amount(scaled: float) -> str:
    """Format an amount with at most two decimals and no trailing zeros."""
    text = f"{round(scaled, 2):.2f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def stock_by_product(entries: Iterable[StockEntry]) -> dict[str, float]:
    """Sum stock amounts per product across all batches and locations."""
    totals: dict[str, float] = {}
    for entry in entries:
        if entry.amount <= 0:
            continue
        totals[entry.product_id] = totals.get(entry.product_id, 0.0) + entry.amount
    return totals


def compute_recipe_fulfillment(
    ingredients: Sequence[RecipeIngredient],
    stock: Mapping[str, float],
    base_servings: float,
    desired_servings: float | None,
) -> RecipeFulfillment:
    """Check every ingredient against stock at the desired servings.

    Amounts are compared as given; the caller is expected to express them in
    each product's stock unit.
    """
    scale = servings_scale(base_servings, desired_servings)
    results: list[IngredientFulfillment] = []
    can_make = True
    for ingredient in ingredients:
        if is_excluded(ingredient):
            results.append(
                IngredientFulfillment(
                    ingredient_id=ingredient.id,
                    product_id=ingredient.product_id,
                    needed=0.0,
                    in_stock=0.0,
                    missing=0.0,
                    fulfilled=True,
                    skipped=True,
                )
            )
            continue

        needed = max(ingredient.amount, 0.0) * scale
        in_stock = stock.get(ingredient.product_id, 0.0)
        fulfilled = in_stock >= needed
        can_make = can_make and fulfilled
        results.append(
            IngredientFulfillment(
                ingredient_id=ingredient.id,
                product_id=ingredient.product_id,
                needed=needed,
                in_stock=in_stock,
                missing=max(needed - in_stock, 0.0),
                fulfilled=fulfilled,
                skipped=False,
            )
        )
    return RecipeFulfillment(can_make=can_make, ingredients=results)


def missing_ingredients(
    fulfillment: RecipeFulfillment, ingredients: Sequence[RecipeIngredient]
) -> list[MissingIngredient]:
    """Return shortfalls of a fulfillment result for a shopping list."""
    units = {ingredient.id: ingredient.unit_id for ingredient in ingredients}
    missing: list[MissingIngredient] = []
    for item in fulfillment.ingredients:
        if item.skipped or item.fulfilled or item.product_id is None:
            continue
        if item.ingredient_id not in units:
            continue
        missing.append(
            MissingIngredient(
                product_id=item.product_id,
                qu_id=units[item.ingredient_id],
                amount=round(item.missing, 2),
            )
        )
    return missing
