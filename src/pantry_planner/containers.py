"""Dependency container wiring for the application."""

from dataclasses import dataclass

from pantry_planner.app_logging import configure_logging
from pantry_planner.config import Settings, parse_log_level
from pantry_planner.services.inventory import InventoryRepository, InventoryService
from pantry_planner.services.meal_plan import MealPlanRepository, MealPlanService
from pantry_planner.services.recipes import RecipeRepository, RecipeService
from pantry_planner.services.stock_parsing import StockParsingService, TextModelClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    inventory_service: InventoryService
    recipe_service: RecipeService
    meal_plan_service: MealPlanService
    stock_parsing_service: StockParsingService


def build_container(
    *,
    inventory_repository: InventoryRepository,
    recipe_repository: RecipeRepository,
    meal_plan_repository: MealPlanRepository,
    text_model_client: TextModelClient,
    settings: Settings | None = None,
) -> AppContainer:
    """Create the dependency container around caller-supplied data access."""
    resolved_settings = settings or Settings()
    configure_logging(parse_log_level(resolved_settings.log_level))
    inventory_service = InventoryService(
        repository=inventory_repository,
        warning_days=resolved_settings.expiry_warning_days,
        urgent_days=resolved_settings.expiry_urgent_days,
    )
    recipe_service = RecipeService(
        repository=recipe_repository,
        debug=resolved_settings.debug,
    )
    meal_plan_service = MealPlanService(
        repository=meal_plan_repository,
        debug=resolved_settings.debug,
    )
    stock_parsing_service = StockParsingService(
        client=text_model_client,
        match_threshold=resolved_settings.fuzzy_match_threshold,
        max_input_chars=resolved_settings.max_parse_input_chars,
        product_context_limit=resolved_settings.parse_product_context_limit,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        inventory_service=inventory_service,
        recipe_service=recipe_service,
        meal_plan_service=meal_plan_service,
        stock_parsing_service=stock_parsing_service,
    )
