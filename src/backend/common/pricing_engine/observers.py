from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Protocol, Tuple

from .logging_config import get_logger
from .models import ZERO

logger = get_logger(__name__)


class PriceObserver(Protocol):
    def notify(self, rule_description: str, total_before: Decimal, total_after: Decimal) -> None:
        """Called once per rule processed, whether it was applied or skipped."""
        ...


@dataclass(frozen=True)
class PriceChange:
    description: str
    total_before: Decimal
    total_after: Decimal

    @property
    def discount(self) -> Decimal:
        return self.total_before - self.total_after


class PriceTracker:
    """Records every rule the engine processes, in notification order."""

    def __init__(self) -> None:
        self._history: List[PriceChange] = []

    def notify(self, rule_description: str, total_before: Decimal, total_after: Decimal) -> None:
        change = PriceChange(
            description=rule_description,
            total_before=total_before,
            total_after=total_after,
        )
        self._history.append(change)
        logger.debug(
            "price_change_tracked",
            rule=rule_description,
            total_before=str(total_before),
            total_after=str(total_after),
        )

    @property
    def history(self) -> Tuple[PriceChange, ...]:
        return tuple(self._history)

    @property
    def total_discount(self) -> Decimal:
        return sum((change.discount for change in self._history), ZERO)

    def clear(self) -> None:
        self._history.clear()
