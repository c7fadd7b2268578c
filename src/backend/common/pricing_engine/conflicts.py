from __future__ import annotations

from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from .models import RuleType
from .rule import PricingRule
from .rules.percentage_discount import PercentageDiscount


class RuleConflict(BaseModel):
    code: str
    message: str
    rule_indexes: List[int] = Field(default_factory=list)


def _is_full_discount(rule: PricingRule) -> bool:
    # Only an unconditional 100% percentage discount is guaranteed to zero the total.
    return isinstance(rule, PercentageDiscount) and rule.percent == 100 and rule.min_order_amount == 0


def detect_conflicts(rules: Sequence[PricingRule]) -> List[RuleConflict]:
    """Static warnings about a rule list; nothing is priced."""
    conflicts: List[RuleConflict] = []

    coupon_indexes = [idx for idx, rule in enumerate(rules) if rule.kind == RuleType.COUPON]
    if len(coupon_indexes) > 1:
        conflicts.append(
            RuleConflict(
                code="multiple_coupons",
                message=(
                    f"{len(coupon_indexes)} coupons configured; only the first eligible coupon is applied."
                ),
                rule_indexes=coupon_indexes,
            )
        )

    by_code: Dict[str, List[int]] = {}
    for idx in coupon_indexes:
        by_code.setdefault(getattr(rules[idx], "code"), []).append(idx)
    for code, indexes in by_code.items():
        if len(indexes) > 1:
            conflicts.append(
                RuleConflict(
                    code="duplicate_coupon_code",
                    message=f"Coupon code {code} appears {len(indexes)} times.",
                    rule_indexes=indexes,
                )
            )

    seen: Dict[PricingRule, List[int]] = {}
    for idx, rule in enumerate(rules):
        if rule.kind == RuleType.COUPON:
            continue
        seen.setdefault(rule, []).append(idx)
    for rule, indexes in seen.items():
        if len(indexes) > 1:
            conflicts.append(
                RuleConflict(
                    code="redundant_rule",
                    message=f"'{rule.description}' is repeated at positions {', '.join(map(str, indexes))}.",
                    rule_indexes=indexes,
                )
            )

    for idx, rule in enumerate(rules):
        if _is_full_discount(rule) and idx < len(rules) - 1:
            conflicts.append(
                RuleConflict(
                    code="unreachable_after_full_discount",
                    message=(
                        f"'{rule.description}' reduces the total to 0; "
                        f"the {len(rules) - idx - 1} rule(s) after it cannot discount further."
                    ),
                    rule_indexes=list(range(idx + 1, len(rules))),
                )
            )
            break

    return conflicts
