from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

ZERO = Decimal("0")
CENTS = Decimal("0.01")


class RuleType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    BULK = "bulk"
    CATEGORY = "category"
    COUPON = "coupon"
    LOYALTY = "loyalty"
    NULL = "null"


class SkipReason(str, Enum):
    INELIGIBLE = "ineligible"
    COUPON_EXCLUSIVITY = "coupon_exclusivity"


def format_number(value: Decimal) -> str:
    # 10.0 -> "10", 12.50 -> "12.5"
    return format(value.normalize(), "f")


def format_money(value: Decimal) -> str:
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def _describe_errors(model_name: str, exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or model_name
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return f"Invalid {model_name}: " + "; ".join(parts)


class ValidatedModel(BaseModel):
    """Base model that reports construction failures as pricing `ValidationError`s."""

    model_config = ConfigDict(extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise ValidationError(
                _describe_errors(type(self).__name__, exc),
                errors=exc.errors(include_url=False),
            ) from exc


class Item(ValidatedModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1, strict=True)
    category: str = Field(min_length=1)

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order(ValidatedModel):
    """Line items of an order. Totals are always derived from the current items."""

    items: List[Item] = Field(default_factory=list)

    def add_item(self, name: str, price: Any, quantity: int, category: str) -> Item:
        item = Item(name=name, price=price, quantity=quantity, category=category)
        self.items.append(item)
        return item

    def remove_item(self, name: str) -> bool:
        for idx, item in enumerate(self.items):
            if item.name == name:
                del self.items[idx]
                return True
        return False

    @property
    def base_total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), ZERO)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def has_category(self, category: str) -> bool:
        return any(item.category == category for item in self.items)

    def category_subtotal(self, category: str) -> Decimal:
        return sum((item.subtotal for item in self.items if item.category == category), ZERO)
