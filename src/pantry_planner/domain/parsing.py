"""Models for stock items parsed from text model output."""

import math
import re
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class RawStockItem(BaseModel):
    """Single stock item as returned by the text model, coerced leniently."""

    model_config = ConfigDict(extra="ignore")

    product_name: str = ""
    product_id: str | None = None
    amount: float = 1.0
    unit_name: str = ""
    best_before_date: date | None = None
    store_name: str = ""
    price: float | None = None
    location_name: str = ""
    note: str = ""

    @field_validator(
        "product_name",
        "unit_name",
        "store_name",
        "location_name",
        "note",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("product_id", mode="before")
    @classmethod
    def _coerce_product_id(cls, value: object) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> float:
        if _is_number(value) and value > 0:
            return float(value)
        return 1.0

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: object) -> float | None:
        if _is_number(value):
            return float(value)
        return None

    @field_validator("best_before_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> date | None:
        if not isinstance(value, str):
            return None
        cleaned = value.strip()
        if not _ISO_DATE.match(cleaned):
            return None
        try:
            return date.fromisoformat(cleaned)
        except ValueError:
            return None


class ParsedStockItem(BaseModel):
    """Stock item reconciled against the household catalog."""

    raw: str
    product_id: str | None = None
    product_name: str
    amount: float = 1.0
    qu_id: str | None = None
    unit_name: str = ""
    best_before_date: date | None = None
    shopping_location_id: str | None = None
    store_name: str = ""
    price: float | None = None
    location_id: str | None = None
    location_name: str = ""
    note: str = ""


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)
