import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.pricing_engine.engine import PricingEngine
from common.pricing_engine.models import Order
from common.pricing_engine.observers import PriceTracker


@pytest.fixture
def make_order():
    def _make(*items) -> Order:
        order = Order()
        for name, price, quantity, category in items:
            order.add_item(name, price, quantity, category)
        return order

    return _make


@pytest.fixture
def single_item_order(make_order):
    def _make(price, category: str = "General") -> Order:
        return make_order(("Item", price, 1, category))

    return _make


@pytest.fixture
def sample_order(make_order) -> Order:
    return make_order(
        ("Laptop", "1000.00", 1, "Electronics"),
        ("Mouse", "25.00", 2, "Electronics"),
        ("Book", "15.00", 3, "Books"),
    )


@pytest.fixture
def tracker() -> PriceTracker:
    return PriceTracker()


@pytest.fixture
def engine() -> PricingEngine:
    return PricingEngine()
