from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, SerializeAsAny

from .models import RuleType, SkipReason
from .rule import PricingRule


class AppliedStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: SerializeAsAny[PricingRule]
    kind: RuleType
    description: str
    total_before: Decimal
    discount: Decimal
    total_after: Decimal


class SkippedStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: SerializeAsAny[PricingRule]
    kind: RuleType
    description: str
    reason: SkipReason


class PriceCalculation(BaseModel):
    """Outcome of one `PricingEngine.calculate` call.

    `applied_rules` and `skipped_rules` keep rule-list order. Every applied
    step's `discount` is the actual reduction (`total_before - total_after`),
    which can be smaller than a rule's nominal amount when the total floors at 0.
    """

    model_config = ConfigDict(frozen=True)

    original_price: Decimal
    final_price: Decimal
    applied_rules: Tuple[AppliedStep, ...] = ()
    skipped_rules: Tuple[SkippedStep, ...] = ()

    @property
    def total_discount(self) -> Decimal:
        return self.original_price - self.final_price

    @property
    def breakdown(self) -> List[Dict[str, Any]]:
        return [
            {
                "description": step.description,
                "total_before": step.total_before,
                "discount": step.discount,
                "total_after": step.total_after,
            }
            for step in self.applied_rules
        ]
