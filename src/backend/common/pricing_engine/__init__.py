"""Sequential pricing-rule engine.

Folds an ordered list of discount rules over an order's running total and
returns the final price together with an auditable trace. Pure domain logic:
no persistence, network or presentation code lives here.
"""

from .calculation import AppliedStep, PriceCalculation, SkippedStep
from .conflicts import RuleConflict, detect_conflicts
from .engine import PricingEngine
from .errors import PricingError, UnknownRuleType, ValidationError
from .models import Item, Order, RuleType, SkipReason
from .observers import PriceChange, PriceObserver, PriceTracker
from .registry import RuleFactory, register_rule, rule_factory
from .rule import PricingRule
from .rules import (
    BulkPricingRule,
    CategoryDiscount,
    CouponRule,
    FixedDiscount,
    LoyaltyPointsRule,
    NullRule,
    PercentageDiscount,
)
