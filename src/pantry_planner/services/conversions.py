"""Unit conversion factor lookup and price normalization."""

from collections.abc import Iterable
from dataclasses import dataclass

from pantry_planner.domain.catalog import QuantityUnit, UnitConversion

# Keyed by unit name as seeded; non-SI units need a product-specific row.
BUILT_IN_CONVERSIONS: dict[str, dict[str, float]] = {
    "kg": {"g": 1000.0},
    "g": {"kg": 0.001},
    "L": {"mL": 1000.0},
    "mL": {"L": 0.001, "pint": 1 / 568.261},
    "pint": {"mL": 568.261},
}

_PER_HUNDRED_UNITS = {"g": "100g", "mL": "100mL"}


@dataclass(frozen=True)
class PriceDisplay:
    """Price scaled to a human-readable unit."""

    scaled_price: float
    display_unit: str


def resolve_built_in_conversion(from_name: str, to_name: str) -> float | None:
    """Return the built-in SI factor between two unit names, if known."""
    return BUILT_IN_CONVERSIONS.get(from_name, {}).get(to_name)


def resolve_factor(
    product_id: str | None,
    from_unit_id: str | None,
    to_unit_id: str | None,
    conversions: Iterable[UnitConversion],
    units: Iterable[QuantityUnit] | None = None,
) -> float:
    """Return the factor converting an amount in one unit to another.

    Lookup order is product-specific row, then global row, then (only when a
    unit catalog is given) the built-in SI table, then identity. A missing
    conversion never raises.
    """
    if from_unit_id is None or to_unit_id is None or from_unit_id == to_unit_id:
        return 1.0

    global_factor: float | None = None
    for conversion in conversions:
        if (
            conversion.from_unit_id != from_unit_id
            or conversion.to_unit_id != to_unit_id
        ):
            continue
        if product_id is not None and conversion.product_id == product_id:
            return conversion.factor
        if conversion.product_id is None and global_factor is None:
            global_factor = conversion.factor
    if global_factor is not None:
        return global_factor

    if units is not None:
        names = {unit.id: unit.name for unit in units}
        from_name = names.get(from_unit_id)
        to_name = names.get(to_unit_id)
        if from_name is not None and to_name is not None:
            built_in = resolve_built_in_conversion(from_name, to_name)
            if built_in is not None:
                return built_in
    return 1.0


def to_stock_amount(amount: float, factor: float) -> float:
    """Convert a purchase amount into stock units."""
    return amount * factor


def to_stock_unit_price(total_price: float, stock_amount: float) -> float:
    """Normalize a line's total price to a price per one stock unit."""
    if stock_amount > 0:
        return total_price / stock_amount
    return total_price


def price_per_unit(price_per_stock_unit: float, factor: float) -> float:
    """Price of one display unit, given the display-to-stock factor."""
    return price_per_stock_unit * factor


def display_unit_price(  # noqa: PLR0913
    price_per_stock_unit: float,
    product_id: str | None,
    display_unit_id: str | None,
    stock_unit_id: str | None,
    conversions: Iterable[UnitConversion],
    units: Iterable[QuantityUnit] | None = None,
) -> float:
    """Price of one display unit (e.g. a purchase unit) for a stored price."""
    factor = resolve_factor(
        product_id, display_unit_id, stock_unit_id, conversions, units
    )
    return price_per_unit(price_per_stock_unit, factor)


def smart_price_display(price_per_stock_unit: float, unit_name: str) -> PriceDisplay:
    """Show gram and millilitre prices per 100 units, others unchanged."""
    display_unit = _PER_HUNDRED_UNITS.get(unit_name)
    if display_unit is not None:
        return PriceDisplay(
            scaled_price=price_per_stock_unit * 100, display_unit=display_unit
        )
    return PriceDisplay(scaled_price=price_per_stock_unit, display_unit=unit_name)


def round_price(value: float, digits: int = 2) -> float:
    """Round a price for display only."""
    return round(value, digits)
