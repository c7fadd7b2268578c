from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator

from ..models import Order, RuleType, format_number
from ..registry import register_rule
from ..rule import ONE_HUNDRED, PricingRule


@register_rule
class CategoryDiscount(PricingRule):
    """Discount worth `percent` of the category's undiscounted subtotal.

    The subtotal always comes from the order's original item prices, so earlier
    rules in the chain do not shrink it. Category matching is case-sensitive.
    """

    rule_type = RuleType.CATEGORY

    category: str = Field(min_length=1)
    percent: Decimal = Field(ge=0, le=100)

    @field_validator("category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def description(self) -> str:
        return f"Category discount: {format_number(self.percent)}% off {self.category}"

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return order.has_category(self.category)

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return current_total - order.category_subtotal(self.category) * self.percent / ONE_HUNDRED
