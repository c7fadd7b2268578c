from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator

from ..models import Order, RuleType, format_number
from ..registry import register_rule
from ..rule import PricingRule, reduce_by_percent


@register_rule
class CouponRule(PricingRule):
    # At most one coupon applies per calculation; PricingEngine enforces that.
    rule_type = RuleType.COUPON

    code: str = Field(min_length=1)
    percent: Decimal = Field(ge=0, le=100)
    min_order_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("code")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def description(self) -> str:
        text = f"Coupon {self.code}: {format_number(self.percent)}% off"
        if self.min_order_amount > 0:
            text += f" orders ${format_number(self.min_order_amount)}+"
        return text

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return current_total >= self.min_order_amount

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return reduce_by_percent(current_total, self.percent)
