from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..models import Order, RuleType, format_number
from ..registry import register_rule
from ..rule import PricingRule, reduce_by_percent


@register_rule
class PercentageDiscount(PricingRule):
    rule_type = RuleType.PERCENTAGE

    percent: Decimal = Field(ge=0, le=100)
    min_order_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def description(self) -> str:
        text = f"Percentage discount: {format_number(self.percent)}% off"
        if self.min_order_amount > 0:
            text += f" (orders ${format_number(self.min_order_amount)}+)"
        return text

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return current_total >= self.min_order_amount

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return reduce_by_percent(current_total, self.percent)
