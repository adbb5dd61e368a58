"""Shorthand date input, e.g. "+7", "+1m" or "0517"."""

import calendar
import re
from datetime import date, timedelta

NEVER_EXPIRES = date(2999, 12, 31)
DECEMBER = 12

_DAYS = re.compile(r"^\+(\d+)d?$")
_MONTHS = re.compile(r"^\+(\d+)m$")
_YEARS = re.compile(r"^\+(\d+)y$")
_MONTH_DAY = re.compile(r"^(\d{2})(\d{2})$")


def parse_date_shorthand(text: str, today: date) -> date | None:
    """Resolve a shorthand into a date, or None when it is not a shorthand.

    ``x``/``never`` mean never expires, ``+N``/``+Nd`` adds days, ``+Nm`` months,
    ``+Ny`` years, and ``MMDD`` is the next occurrence of that day.
    """
    cleaned = text.strip().lower()
    if not cleaned:
        return None
    if cleaned in {"x", "never"}:
        return NEVER_EXPIRES

    days = _DAYS.match(cleaned)
    if days:
        return today + timedelta(days=int(days.group(1)))
    months = _MONTHS.match(cleaned)
    if months:
        return add_months(today, int(months.group(1)))
    years = _YEARS.match(cleaned)
    if years:
        return add_months(today, 12 * int(years.group(1)))
    month_day = _MONTH_DAY.match(cleaned)
    if month_day:
        return _next_month_day(
            int(month_day.group(1)), int(month_day.group(2)), today
        )
    return None


def add_months(day: date, months: int) -> date:
    """Add months, clamping to the last day of a shorter month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // DECEMBER
    month = month_index % DECEMBER + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _next_month_day(month: int, day: int, today: date) -> date | None:
    if not 1 <= month <= DECEMBER:
        return None
    for year in (today.year, today.year + 1):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if candidate >= today:
            return candidate
    return None
