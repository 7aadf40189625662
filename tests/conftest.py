"""
Test configuration and fixtures for the Sera cart engine
"""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest

from sera_cart.domain.cart_engine import CartEngine
from sera_cart.domain.entities.menu_offering import MenuOffering
from sera_cart.domain.value_objects.customization import Customization
from sera_cart.domain.value_objects.money import Money
from sera_cart.domain.value_objects.offering_id import OfferingId
from sera_cart.infrastructure.configuration.config import reset_config


@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "JSON_LOGS": "false",
    }

    reset_config()
    with patch.dict(os.environ, test_env, clear=True):
        yield test_env
    reset_config()


@pytest.fixture
def check_invariants():
    """Assert the running totals match the lines of a cart"""

    def _check(engine: CartEngine):
        snapshot = engine.snapshot()
        assert snapshot.total_items == sum(line.quantity for line in snapshot.lines)
        expected = Money.zero(engine.currency)
        for line in snapshot.lines:
            expected = expected + line.unit_price * line.quantity
        assert snapshot.total_amount == expected
        assert all(line.quantity > 0 for line in snapshot.lines)
        return snapshot

    return _check


def make_offering(offering_id: str, price, name: str = None, **kwargs) -> MenuOffering:
    """Build a catalog offering priced in the default currency"""
    return MenuOffering(
        id=OfferingId(offering_id),
        name=name or offering_id.title(),
        base_price=Money(Decimal(str(price))),
        **kwargs,
    )


@pytest.fixture
def offering_factory():
    return make_offering


@pytest.fixture
def engine():
    return CartEngine()


@pytest.fixture
def dish_x():
    return make_offering(
        "dish-x", 200, "Paneer Tikka", restaurant_id="r1", restaurant_name="Spice Garden", category="starters"
    )


@pytest.fixture
def pizza():
    return make_offering(
        "pizza", 300, "Margherita Pizza", restaurant_id="r1", restaurant_name="Spice Garden", category="mains"
    )


@pytest.fixture
def lassi():
    return make_offering("lassi", 80, "Mango Lassi", restaurant_id="r1", category="beverages")


@pytest.fixture
def large_hot():
    return Customization(
        size="large",
        spice_level="hot",
        special_instructions="",
        configured_quantity=2,
        total_price=Money(800),
    )


@pytest.fixture
def small_hot():
    return Customization(
        size="small",
        spice_level="hot",
        special_instructions="",
        configured_quantity=1,
        total_price=Money(250),
    )
