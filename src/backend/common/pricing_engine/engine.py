from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .calculation import AppliedStep, PriceCalculation, SkippedStep
from .logging_config import get_logger
from .models import ZERO, Order, RuleType, SkipReason
from .observers import PriceObserver
from .rule import PricingRule
from .rules.null_rule import NullRule

logger = get_logger(__name__)


class PricingEngine:
    """Folds pricing rules, in list order, over an order's running total.

    Each applied rule's result is floored at 0 before the next rule sees it.
    Only the first eligible coupon applies; later coupons are skipped without
    evaluating their eligibility. Attached observers are notified for every
    rule processed, and an observer that raises is logged and skipped.
    """

    def __init__(self, observers: Optional[Iterable[PriceObserver]] = None):
        self._observers: List[PriceObserver] = list(observers) if observers is not None else []

    @property
    def observers(self) -> Tuple[PriceObserver, ...]:
        return tuple(self._observers)

    def attach(self, observer: PriceObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: PriceObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def calculate(self, order: Order, rules: Sequence[PricingRule]) -> PriceCalculation:
        original_price = order.base_total
        running_total = original_price
        coupon_applied = False
        applied: List[AppliedStep] = []
        skipped: List[SkippedStep] = []

        for rule in list(rules) or [NullRule()]:
            total_before = running_total
            if rule.kind == RuleType.COUPON and coupon_applied:
                skipped.append(self._skip(rule, SkipReason.COUPON_EXCLUSIVITY))
            elif not rule.eligible(running_total, order):
                skipped.append(self._skip(rule, SkipReason.INELIGIBLE))
            else:
                running_total = max(ZERO, rule.apply(running_total, order))
                applied.append(
                    AppliedStep(
                        rule=rule,
                        kind=rule.kind,
                        description=rule.description,
                        total_before=total_before,
                        discount=total_before - running_total,
                        total_after=running_total,
                    )
                )
                logger.debug(
                    "pricing_rule_applied",
                    kind=rule.kind.value,
                    rule=rule.description,
                    total_before=str(total_before),
                    total_after=str(running_total),
                )
                if rule.kind == RuleType.COUPON:
                    coupon_applied = True
            self._notify(rule, total_before, running_total)

        return PriceCalculation(
            original_price=original_price,
            final_price=running_total,
            applied_rules=tuple(applied),
            skipped_rules=tuple(skipped),
        )

    def calculate_variants(
        self,
        order: Order,
        rule_sets: Mapping[str, Sequence[PricingRule]],
    ) -> Dict[str, PriceCalculation]:
        """Price the same order under several named rule sets."""
        return {name: self.calculate(order, rules) for name, rules in rule_sets.items()}

    def _skip(self, rule: PricingRule, reason: SkipReason) -> SkippedStep:
        logger.debug(
            "pricing_rule_skipped",
            kind=rule.kind.value,
            rule=rule.description,
            reason=reason.value,
        )
        return SkippedStep(rule=rule, kind=rule.kind, description=rule.description, reason=reason)

    def _notify(self, rule: PricingRule, total_before: Decimal, total_after: Decimal) -> None:
        description = rule.description
        for observer in list(self._observers):
            try:
                observer.notify(description, total_before, total_after)
            except Exception:
                logger.exception(
                    "price_observer_failed",
                    observer=type(observer).__name__,
                    rule=description,
                )
