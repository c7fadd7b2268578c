from __future__ import annotations

from typing import Any, Dict, List, Optional


class PricingError(Exception):
    """Base class for pricing engine errors."""


class ValidationError(PricingError, ValueError):
    """Invalid item fields, rule parameters or rule-set configuration."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class UnknownRuleType(PricingError, ValueError):
    def __init__(self, rule_type: Any):
        self.rule_type = rule_type
        super().__init__(f"Unknown rule type '{rule_type}'.")
