from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import ClassVar

from pydantic import ConfigDict

from .models import Order, RuleType, ValidatedModel

ONE_HUNDRED = Decimal("100")


def reduce_by_percent(total: Decimal, percent: Decimal) -> Decimal:
    return total * (1 - percent / ONE_HUNDRED)


class PricingRule(ValidatedModel, ABC):
    """A frozen discount rule folded over the running order total.

    `eligible` and `apply` read the running total and the (unmodified) order;
    neither mutates anything.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rule_type: ClassVar[RuleType]

    @property
    def kind(self) -> RuleType:
        return self.rule_type

    @property
    @abstractmethod
    def description(self) -> str:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def eligible(self, current_total: Decimal, order: Order) -> bool:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def apply(self, current_total: Decimal, order: Order) -> Decimal:  # pragma: no cover
        raise NotImplementedError
