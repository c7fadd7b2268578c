from __future__ import annotations

from decimal import Decimal

from ..models import Order, RuleType
from ..rule import PricingRule


class NullRule(PricingRule):
    """Stand-in used when a calculation receives no rules.

    Not registered with the rule factory: configuration can never produce it.
    """

    rule_type = RuleType.NULL

    @property
    def description(self) -> str:
        return "No discount applied"

    def eligible(self, current_total: Decimal, order: Order) -> bool:
        return True

    def apply(self, current_total: Decimal, order: Order) -> Decimal:
        return current_total
