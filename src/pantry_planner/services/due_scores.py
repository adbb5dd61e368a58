"""Urgency scoring from ingredient best-before dates."""

from collections.abc import Iterable, Sequence
from datetime import date

from pantry_planner.domain.recipes import RecipeIngredient
from pantry_planner.domain.stock import ExpiryStatus, StockEntry
from pantry_planner.services.fulfillment import is_excluded

MAX_DUE_SCORE = 100.0


def days_until(best_before: date, today: date) -> int:
    """Whole days from today until the best-before date (negative if past)."""
    return (best_before - today).days


def score_for_days(days: int) -> float:
    """Map days-until-expiry to a score; anything due today or overdue maxes out."""
    if days <= 0:
        return MAX_DUE_SCORE
    return MAX_DUE_SCORE / (1 + days)


def soonest_expiry_days(
    ingredients: Sequence[RecipeIngredient],
    stock_entries: Iterable[StockEntry],
    today: date,
) -> int | None:
    """Smallest days-until-expiry over dated stock of the recipe's products."""
    product_ids = {
        ingredient.product_id
        for ingredient in ingredients
        if not is_excluded(ingredient)
    }
    soonest: int | None = None
    for entry in stock_entries:
        if entry.product_id not in product_ids or entry.best_before_date is None:
            continue
        if entry.amount <= 0:
            continue
        days = days_until(entry.best_before_date, today)
        if soonest is None or days < soonest:
            soonest = days
    return soonest


def compute_due_score(
    ingredients: Sequence[RecipeIngredient],
    stock_entries: Iterable[StockEntry],
    today: date,
) -> float:
    """Score a recipe by how soon its ingredients spoil; 0 when nothing is dated."""
    soonest = soonest_expiry_days(ingredients, stock_entries, today)
    if soonest is None:
        return 0.0
    return score_for_days(soonest)


def expiry_status(
    best_before: date | None,
    today: date,
    warning_days: int = 7,
    urgent_days: int = 2,
) -> ExpiryStatus:
    """Classify a best-before date into a freshness band."""
    if best_before is None:
        return ExpiryStatus.FRESH
    days = days_until(best_before, today)
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days <= urgent_days:
        return ExpiryStatus.URGENT
    if days <= warning_days:
        return ExpiryStatus.WARNING
    return ExpiryStatus.FRESH
