import subprocess
import sys
from decimal import Decimal
from pathlib import Path

from common.pricing_engine.engine import PricingEngine
from common.pricing_engine.models import Order, RuleType, SkipReason
from common.pricing_engine.rules import (
    BulkPricingRule,
    CategoryDiscount,
    CouponRule,
    FixedDiscount,
    LoyaltyPointsRule,
    NullRule,
    PercentageDiscount,
)


def test_full_chain_matches_worked_example(engine, sample_order):
    rules = [
        BulkPricingRule(min_quantity=5, percent=10),
        CategoryDiscount(category="Electronics", percent=5),
        CouponRule(code="SAVE20", percent=20, min_order_amount="100.0"),
        LoyaltyPointsRule(points=500, conversion_rate="0.01"),
    ]
    calc = engine.calculate(sample_order, rules)

    assert calc.original_price == Decimal("1095.0")
    assert calc.final_price == Decimal("741.40")
    assert len(calc.applied_rules) == 4
    assert len(calc.skipped_rules) == 0
    assert calc.total_discount == Decimal("353.60")
    assert calc.breakdown == [
        {
            "description": "Bulk discount: 10% off (5+ items)",
            "total_before": Decimal("1095.0"),
            "discount": Decimal("109.50"),
            "total_after": Decimal("985.50"),
        },
        {
            "description": "Category discount: 5% off Electronics",
            "total_before": Decimal("985.50"),
            "discount": Decimal("52.50"),
            "total_after": Decimal("933.00"),
        },
        {
            "description": "Coupon SAVE20: 20% off orders $100+",
            "total_before": Decimal("933.00"),
            "discount": Decimal("186.60"),
            "total_after": Decimal("746.40"),
        },
        {
            "description": "Loyalty points: $5.00 off (500 points)",
            "total_before": Decimal("746.40"),
            "discount": Decimal("5.00"),
            "total_after": Decimal("741.40"),
        },
    ]
    assert [step.rule for step in calc.applied_rules] == rules


def test_rule_order_changes_final_price(engine, single_item_order):
    order = single_item_order("100.00")

    pct_then_fixed = engine.calculate(order, [PercentageDiscount(percent=10), FixedDiscount(amount=5)])
    fixed_then_pct = engine.calculate(order, [FixedDiscount(amount=5), PercentageDiscount(percent=10)])

    assert [s.total_after for s in pct_then_fixed.applied_rules] == [Decimal("90"), Decimal("85")]
    assert pct_then_fixed.final_price == Decimal("85.00")
    assert [s.total_after for s in fixed_then_pct.applied_rules] == [Decimal("95"), Decimal("85.5")]
    assert fixed_then_pct.final_price == Decimal("85.50")


def test_only_first_coupon_applies(engine, single_item_order):
    first = CouponRule(code="FIRST", percent=10, min_order_amount=100)
    second = CouponRule(code="SECOND", percent=20, min_order_amount=100)
    calc = engine.calculate(single_item_order("200.00"), [first, second])

    assert calc.final_price == Decimal("180.0")
    assert [step.rule for step in calc.applied_rules] == [first]
    assert len(calc.skipped_rules) == 1
    skipped = calc.skipped_rules[0]
    assert skipped.rule == second
    assert skipped.kind == RuleType.COUPON
    assert skipped.reason == SkipReason.COUPON_EXCLUSIVITY
    assert skipped.description == "Coupon SECOND: 20% off orders $100+"


def test_ineligible_coupon_does_not_block_later_coupon(engine, single_item_order):
    big = CouponRule(code="BIG", percent=50, min_order_amount=500)
    small = CouponRule(code="SMALL", percent=10, min_order_amount=100)
    late = CouponRule(code="LATE", percent=5)
    calc = engine.calculate(single_item_order("200"), [big, small, late])

    assert [step.rule.code for step in calc.applied_rules] == ["SMALL"]
    assert [(s.rule.code, s.reason) for s in calc.skipped_rules] == [
        ("BIG", SkipReason.INELIGIBLE),
        ("LATE", SkipReason.COUPON_EXCLUSIVITY),
    ]
    assert calc.final_price == Decimal("180")


def test_coupon_exclusivity_skips_without_checking_eligibility(engine, single_item_order):
    # The second coupon would be ineligible (180 < 500) but is reported as an exclusivity skip.
    calc = engine.calculate(
        single_item_order("200"),
        [CouponRule(code="A", percent=10), CouponRule(code="B", percent=10, min_order_amount=500)],
    )
    assert calc.skipped_rules[0].reason == SkipReason.COUPON_EXCLUSIVITY


def test_discount_exceeding_total_floors_at_zero(engine, single_item_order):
    calc = engine.calculate(single_item_order("10.00"), [FixedDiscount(amount="50.0")])
    assert calc.final_price == Decimal("0.0")
    step = calc.applied_rules[0]
    assert step.discount == Decimal("10.0")
    assert step.total_after == Decimal("0")


def test_floor_applies_after_every_step(engine, make_order):
    # The category cut (50) is larger than the running total left by the fixed discount (10).
    order = make_order(("TV", "100", 1, "Electronics"))
    rules = [
        FixedDiscount(amount=90),
        CategoryDiscount(category="Electronics", percent=50),
        PercentageDiscount(percent=10),
    ]
    calc = engine.calculate(order, rules)
    assert [s.total_after for s in calc.applied_rules] == [Decimal("10"), Decimal("0"), Decimal("0")]
    assert [s.discount for s in calc.applied_rules] == [Decimal("90"), Decimal("10"), Decimal("0")]
    assert all(step.total_after >= 0 for step in calc.applied_rules)
    assert calc.final_price == Decimal("0")


def test_empty_rule_list_records_null_rule(engine, single_item_order):
    order = single_item_order("42.50")
    calc = engine.calculate(order, [])

    assert calc.final_price == calc.original_price == Decimal("42.50")
    assert len(calc.applied_rules) == 1
    step = calc.applied_rules[0]
    assert isinstance(step.rule, NullRule)
    assert step.kind == RuleType.NULL
    assert step.description == "No discount applied"
    assert step.discount == Decimal("0")
    assert calc.skipped_rules == ()


def test_no_eligible_rules_keeps_original_price(engine, single_item_order):
    rules = [
        PercentageDiscount(percent=10, min_order_amount="100.0"),
        BulkPricingRule(min_quantity=10, percent=20),
    ]
    calc = engine.calculate(single_item_order("50.0"), rules)
    assert calc.original_price == calc.final_price == Decimal("50.0")
    assert calc.applied_rules == ()
    assert [s.reason for s in calc.skipped_rules] == [SkipReason.INELIGIBLE, SkipReason.INELIGIBLE]


def test_category_not_in_order_is_skipped(engine, make_order):
    order = make_order(("Book", "20.00", 1, "Books"))
    calc = engine.calculate(order, [CategoryDiscount(category="Electronics", percent=10)])
    assert calc.final_price == Decimal("20.0")
    assert calc.applied_rules == ()
    assert len(calc.skipped_rules) == 1
    assert calc.skipped_rules[0].reason == SkipReason.INELIGIBLE
    assert calc.skipped_rules[0].description == "Category discount: 10% off Electronics"


def test_empty_order_applies_unconditional_rules_with_zero_discount(engine):
    calc = engine.calculate(Order(), [PercentageDiscount(percent=10), FixedDiscount(amount=5)])
    assert calc.original_price == calc.final_price == Decimal("0")
    assert [step.discount for step in calc.applied_rules] == [Decimal("0"), Decimal("0")]


def test_bulk_and_category_read_unmodified_order(engine, sample_order):
    # A large fixed cut first must not change what bulk/category rules see.
    rules = [
        FixedDiscount(amount=1000),
        BulkPricingRule(min_quantity=6, percent=50),
        CategoryDiscount(category="Books", percent=100),
    ]
    calc = engine.calculate(sample_order, rules)
    assert [s.total_after for s in calc.applied_rules] == [Decimal("95.00"), Decimal("47.5"), Decimal("2.5")]


def test_calculate_is_deterministic(engine, sample_order):
    rules = [
        BulkPricingRule(min_quantity=5, percent=10),
        CouponRule(code="SAVE20", percent=20, min_order_amount=100),
        CouponRule(code="AGAIN", percent=20),
    ]
    first = engine.calculate(sample_order, rules)
    second = engine.calculate(sample_order, rules)
    assert first == second
    assert first.model_dump(mode="json") == second.model_dump(mode="json")


def test_calculate_does_not_mutate_inputs(engine, sample_order):
    rules = [CouponRule(code="A", percent=10), CouponRule(code="B", percent=10)]
    rules_before = list(rules)
    items_before = list(sample_order.items)
    engine.calculate(sample_order, rules)
    assert rules == rules_before
    assert sample_order.items == items_before


def test_accepts_any_sequence_of_rules(engine, single_item_order):
    calc = engine.calculate(single_item_order("100"), (PercentageDiscount(percent=50),))
    assert calc.final_price == Decimal("50")


def test_calculation_serializes_steps_with_rule_parameters(engine, make_order):
    order = make_order(("Book", "20", 1, "Books"))
    calc = engine.calculate(
        order,
        [FixedDiscount(amount=5), CategoryDiscount(category="Electronics", percent=10)],
    )
    payload = calc.model_dump(mode="json")
    assert payload["original_price"] == "20"
    assert payload["final_price"] == "15"
    assert payload["applied_rules"][0]["rule"] == {"amount": "5", "min_order_amount": "0"}
    assert payload["applied_rules"][0]["kind"] == "fixed"
    assert payload["skipped_rules"][0]["rule"] == {"category": "Electronics", "percent": "10"}
    assert payload["skipped_rules"][0]["reason"] == "ineligible"


def test_calculate_variants_prices_each_rule_set(engine, single_item_order):
    order = single_item_order("100")
    results = engine.calculate_variants(
        order,
        {
            "control": [],
            "variant_a": [PercentageDiscount(percent=10)],
            "variant_b": [FixedDiscount(amount=15)],
        },
    )
    assert list(results) == ["control", "variant_a", "variant_b"]
    assert results["control"].final_price == Decimal("100")
    assert results["variant_a"].final_price == Decimal("90")
    assert results["variant_b"].final_price == Decimal("85")


def test_engine_is_reusable_across_orders(single_item_order):
    engine = PricingEngine()
    coupon = [CouponRule(code="ONCE", percent=10)]
    assert engine.calculate(single_item_order("100"), coupon).final_price == Decimal("90")
    # Coupon state is per calculation, not per engine.
    assert engine.calculate(single_item_order("200"), coupon).final_price == Decimal("180")


def test_calculate_writes_nothing_to_stdout_without_logging_configuration():
    backend_dir = Path(__file__).resolve().parents[2]
    script = "\n".join(
        [
            "from common.pricing_engine import CouponRule, Order, PercentageDiscount, PriceTracker, PricingEngine",
            "order = Order()",
            "order.add_item('Item', '100', 1, 'General')",
            "engine = PricingEngine(observers=[PriceTracker()])",
            "rules = [PercentageDiscount(percent=10), CouponRule(code='A', percent=5), CouponRule(code='B', percent=5)]",
            "calc = engine.calculate(order, rules)",
            "assert calc.final_price == 85.5",
        ]
    )
    result = subprocess.run(
        [sys.executable, "-c", script],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
