from .bulk_pricing import BulkPricingRule
from .category_discount import CategoryDiscount
from .coupon import CouponRule
from .fixed_discount import FixedDiscount
from .loyalty_points import LoyaltyPointsRule
from .null_rule import NullRule
from .percentage_discount import PercentageDiscount

__all__ = [
    "PercentageDiscount",
    "FixedDiscount",
    "BulkPricingRule",
    "CategoryDiscount",
    "CouponRule",
    "LoyaltyPointsRule",
    "NullRule",
]
