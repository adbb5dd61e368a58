"""Tests for recipe fulfillment."""

import pytest

from pantry_planner.domain.catalog import Product
from pantry_planner.domain.recipes import RecipeFulfillment
from pantry_planner.domain.stock import StockEntry
from pantry_planner.services.fulfillment import (
    compute_recipe_fulfillment,
    format_scaled_amount,
    is_excluded,
    missing_ingredients,
    scale_amount,
    stock_by_product,
)
from tests.conftest import make_ingredient

CARROT = Product(id="p-carrot", name="Carrot")
SALT = Product(id="p-salt", name="Salt")


def _soup() -> list:
    return [
        make_ingredient("soup", CARROT.id, amount=3, unit_id="u-piece"),
        make_ingredient("soup", SALT.id, amount=1, skip_stock_check=True),
    ]


def test_soup_at_base_servings_is_short_one_carrot() -> None:
    result = compute_recipe_fulfillment(_soup(), {CARROT.id: 2}, 2, 2)

    assert result.can_make is False
    assert result.missing_count == 1
    carrot, salt = result.ingredients
    assert carrot.needed == 3
    assert carrot.missing == 1
    assert salt.skipped is True


def test_soup_at_double_servings_needs_six_carrots() -> None:
    result = compute_recipe_fulfillment(_soup(), {CARROT.id: 2}, 2, 4)

    carrot = result.ingredients[0]
    assert carrot.needed == pytest.approx(6)
    assert carrot.missing == pytest.approx(4)


@pytest.mark.parametrize("multiple", [1, 2, 3, 7])
def test_scaling_is_linear(multiple: int) -> None:
    ingredients = [make_ingredient("r1", "p1", amount=2.5)]

    result = compute_recipe_fulfillment(ingredients, {}, 4, 4 * multiple)

    assert result.ingredients[0].needed == pytest.approx(2.5 * multiple)


def test_excluded_ingredients_never_block_cooking() -> None:
    ingredients = [
        make_ingredient("r1", "p1", amount=5, skip_stock_check=True),
        make_ingredient("r1", "p2", amount=5, variable_amount="to taste"),
        make_ingredient("r1", None, amount=5),
        make_ingredient(
            "r1",
            "p3",
            amount=5,
            product=Product(
                id="p3", name="Pepper", exclude_from_recipe_fulfillment=True
            ),
        ),
    ]

    result = compute_recipe_fulfillment(ingredients, {}, 1, 10)

    assert result.can_make is True
    assert result.missing_count == 0
    assert all(item.skipped for item in result.ingredients)


def test_recipe_without_ingredients_is_makeable() -> None:
    assert compute_recipe_fulfillment([], {}, 2, 2).can_make is True


def test_stock_equal_to_need_is_fulfilled() -> None:
    ingredients = [make_ingredient("r1", "p1", amount=2)]

    result = compute_recipe_fulfillment(ingredients, {"p1": 4}, 1, 2)

    assert result.can_make is True


def test_non_positive_base_servings_do_not_divide_by_zero() -> None:
    ingredients = [make_ingredient("r1", "p1", amount=2)]

    result = compute_recipe_fulfillment(ingredients, {}, 0, 4)

    assert result.ingredients[0].needed == 2


def test_negative_desired_servings_need_nothing() -> None:
    ingredients = [make_ingredient("r1", "p1", amount=2)]

    result = compute_recipe_fulfillment(ingredients, {}, 2, -4)

    assert result.ingredients[0].needed == 0
    assert result.ingredients[0].missing == 0


def test_missing_desired_servings_uses_base() -> None:
    ingredients = [make_ingredient("r1", "p1", amount=2)]

    result = compute_recipe_fulfillment(ingredients, {}, 3, None)

    assert result.ingredients[0].needed == 2


def test_is_excluded_for_plain_ingredient_is_false() -> None:
    assert is_excluded(make_ingredient("r1", "p1")) is False


def test_stock_by_product_sums_batches() -> None:
    entries = [
        StockEntry(product_id="p1", amount=2, location_id="fridge"),
        StockEntry(product_id="p1", amount=1.5, location_id="pantry"),
        StockEntry(product_id="p2", amount=0),
    ]

    assert stock_by_product(entries) == {"p1": 3.5}


def test_missing_ingredients_lists_shortfalls_with_units() -> None:
    ingredients = _soup()
    result = compute_recipe_fulfillment(ingredients, {CARROT.id: 2}, 3, 4)

    missing = missing_ingredients(result, ingredients)

    assert len(missing) == 1
    assert missing[0].product_id == CARROT.id
    assert missing[0].qu_id == "u-piece"
    assert missing[0].amount == 2.0


def test_missing_count_ignores_skipped_rows() -> None:
    result = RecipeFulfillment(can_make=True, ingredients=[])

    assert result.missing_count == 0


def test_scale_and_format_amount() -> None:
    assert scale_amount(3, 2, 3) == pytest.approx(4.5)
    assert format_scaled_amount(4.5) == "4.5"
    assert format_scaled_amount(2.0) == "2"
    assert format_scaled_amount(1 / 3) == "0.33"
    assert format_scaled_amount(100) == "100"
