"""Tests for date shorthands."""

from datetime import date

from pantry_planner.services.dates import (
    NEVER_EXPIRES,
    add_months,
    parse_date_shorthand,
)
from tests.conftest import TODAY


def test_never_expires() -> None:
    assert parse_date_shorthand("x", TODAY) == NEVER_EXPIRES
    assert parse_date_shorthand(" Never ", TODAY) == NEVER_EXPIRES


def test_relative_offsets() -> None:
    assert parse_date_shorthand("+7", TODAY) == date(2026, 3, 17)
    assert parse_date_shorthand("+7d", TODAY) == date(2026, 3, 17)
    assert parse_date_shorthand("+1m", TODAY) == date(2026, 4, 10)
    assert parse_date_shorthand("+1y", TODAY) == date(2027, 3, 10)


def test_month_day_picks_next_occurrence() -> None:
    assert parse_date_shorthand("0517", TODAY) == date(2026, 5, 17)
    assert parse_date_shorthand("0101", TODAY) == date(2027, 1, 1)
    assert parse_date_shorthand("0310", TODAY) == TODAY


def test_invalid_shorthands() -> None:
    assert parse_date_shorthand("", TODAY) is None
    assert parse_date_shorthand("1317", TODAY) is None
    assert parse_date_shorthand("0532", TODAY) is None
    assert parse_date_shorthand("tomorrow", TODAY) is None


def test_add_months_clamps_to_month_end() -> None:
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)
