from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..models import ZERO, Order, RuleType, format_money, format_number
from ..registry import register_rule
from ..rule import PricingRule


@register_rule
class FixedDiscount(PricingRule):
    rule_type = RuleType.FIXED

    amount: Decimal = Field(ge=0)
    min_order_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def description(self) -> str:
        text = f"Fixed discount: ${format_money(self.amount)} off"
        if self.min_order_amount > 0:
            text += f" (orders ${format_number(self.min_order_amount)}+)"
        return text

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return current_total >= self.min_order_amount

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return max(ZERO, current_total - self.amount)
