"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from pantry_planner.config import Settings
from pantry_planner.containers import AppContainer, build_container
from pantry_planner.domain.catalog import (
    Catalog,
    NamedEntry,
    Product,
    QuantityUnit,
    UnitConversion,
)
from pantry_planner.domain.meal_plan import MealPlanEntry
from pantry_planner.domain.recipes import Recipe, RecipeIngredient
from pantry_planner.domain.stock import StockEntry
from pantry_planner.services.inventory import InventoryRepository
from pantry_planner.services.meal_plan import MealPlanRepository
from pantry_planner.services.recipes import RecipeRepository
from pantry_planner.services.stock_parsing import TextModelClient

TODAY = date(2026, 3, 10)


@dataclass
class InMemoryPantryRepository(
    InventoryRepository, RecipeRepository, MealPlanRepository
):
    """In-memory pantry data for tests."""

    products: list[Product] = field(default_factory=list)
    recipes: list[Recipe] = field(default_factory=list)
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    stock: list[StockEntry] = field(default_factory=list)
    entries: list[MealPlanEntry] = field(default_factory=list)
    kcal: dict[str, float] = field(default_factory=dict)

    def list_products(self) -> list[Product]:
        return self.products

    def list_recipes(self) -> list[Recipe]:
        return self.recipes

    def get_recipes(self, recipe_ids: set[str]) -> list[Recipe]:
        return [recipe for recipe in self.recipes if recipe.id in recipe_ids]

    def list_ingredients(
        self, recipe_ids: set[str]
    ) -> dict[str, list[RecipeIngredient]]:
        grouped: dict[str, list[RecipeIngredient]] = {}
        for ingredient in self.ingredients:
            if ingredient.recipe_id in recipe_ids:
                grouped.setdefault(ingredient.recipe_id, []).append(ingredient)
        return grouped

    def list_stock_entries(self) -> list[StockEntry]:
        return self.stock

    def list_entries(self, start: date, end: date) -> list[MealPlanEntry]:
        return [entry for entry in self.entries if start <= entry.day < end]

    def get_kcal_per_serving(self, recipe_ids: set[str]) -> dict[str, float]:
        return {
            recipe_id: kcal
            for recipe_id, kcal in self.kcal.items()
            if recipe_id in recipe_ids
        }


@dataclass
class FakeTextModelClient(TextModelClient):
    """Fake text model returning a fixed answer and recording prompts."""

    response: str = '{"items": []}'
    prompts: list[str] = field(default_factory=list)

    async def complete(
        self,
        *,
        system_prompt: str,
        user_text: str,
        schema: dict[str, object],
    ) -> str:
        self.prompts.append(system_prompt)
        return self.response


def make_ingredient(  # noqa: PLR0913
    recipe_id: str,
    product_id: str | None,
    amount: float = 1,
    unit_id: str | None = None,
    skip_stock_check: bool = False,
    variable_amount: str | None = None,
    product: Product | None = None,
    ingredient_id: str | None = None,
) -> RecipeIngredient:
    return RecipeIngredient(
        id=ingredient_id or f"{recipe_id}-{product_id}-{unit_id}",
        recipe_id=recipe_id,
        product_id=product_id,
        amount=amount,
        unit_id=unit_id,
        skip_stock_check=skip_stock_check,
        variable_amount=variable_amount,
        product=product,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(log_level="WARNING")


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        products=[
            Product(id="p-milk", name="Milk", stock_unit_id="u-ml"),
            Product(
                id="p-flour",
                name="Plain Flour",
                stock_unit_id="u-g",
                location_id="l-pantry",
                shopping_location_id="s-aldi",
            ),
            Product(id="p-tomatoes", name="Chopped Tomatoes", stock_unit_id="u-can"),
            Product(id="p-cheddar", name="Cheddar", stock_unit_id="u-g"),
        ],
        units=[
            QuantityUnit(id="u-g", name="g"),
            QuantityUnit(id="u-kg", name="kg"),
            QuantityUnit(id="u-ml", name="mL"),
            QuantityUnit(id="u-l", name="L"),
            QuantityUnit(id="u-can", name="can", name_plural="cans"),
            QuantityUnit(id="u-piece", name="piece", name_plural="pieces"),
        ],
        stores=[
            NamedEntry(id="s-tesco", name="Tesco"),
            NamedEntry(id="s-aldi", name="Aldi"),
        ],
        locations=[
            NamedEntry(id="l-fridge", name="Fridge"),
            NamedEntry(id="l-pantry", name="Pantry"),
        ],
        conversions=[
            UnitConversion(
                product_id=None, from_unit_id="u-kg", to_unit_id="u-g", factor=1000
            ),
            UnitConversion(
                product_id=None, from_unit_id="u-l", to_unit_id="u-ml", factor=1000
            ),
        ],
    )


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def text_model_client() -> FakeTextModelClient:
    return FakeTextModelClient()


@pytest.fixture
def container(
    settings: Settings,
    pantry_repository: InMemoryPantryRepository,
    text_model_client: FakeTextModelClient,
) -> AppContainer:
    return build_container(
        inventory_repository=pantry_repository,
        recipe_repository=pantry_repository,
        meal_plan_repository=pantry_repository,
        text_model_client=text_model_client,
        settings=settings,
    )
