from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..models import ZERO, Order, RuleType, format_money
from ..registry import register_rule
from ..rule import PricingRule


@register_rule
class LoyaltyPointsRule(PricingRule):
    rule_type = RuleType.LOYALTY

    points: int = Field(ge=0, strict=True)
    conversion_rate: Decimal = Field(ge=0)

    @property
    def points_value(self) -> Decimal:
        return self.points * self.conversion_rate

    @property
    def description(self) -> str:
        return f"Loyalty points: ${format_money(self.points_value)} off ({self.points} points)"

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return self.points > 0

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return max(ZERO, current_total - self.points_value)
