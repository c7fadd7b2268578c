from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..models import Order, RuleType, format_number
from ..registry import register_rule
from ..rule import PricingRule, reduce_by_percent


@register_rule
class BulkPricingRule(PricingRule):
    """Percentage off the running total once the order holds enough units.

    Eligibility counts units across the whole order (`Order.total_quantity`),
    not distinct line items.
    """

    rule_type = RuleType.BULK

    min_quantity: int = Field(ge=1, strict=True)
    percent: Decimal = Field(ge=0, le=100)

    @property
    def description(self) -> str:
        return f"Bulk discount: {format_number(self.percent)}% off ({self.min_quantity}+ items)"

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return order.total_quantity >= self.min_quantity

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return reduce_by_percent(current_total, self.percent)
