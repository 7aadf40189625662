"""
Application Use Cases Tests
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from sera_cart.application.dtos.cart_dtos import (
    AddToCartRequest,
    OrderConfirmation,
    UpdateQuantityRequest,
)
from sera_cart.application.use_cases.cart_management_use_case import CartManagementUseCase
from sera_cart.application.use_cases.checkout_use_case import CheckoutUseCase, OrderGateway
from sera_cart.domain.customization_options import build_customization
from sera_cart.domain.value_objects.money import Money
from sera_cart.infrastructure.utilities.exceptions import (
    CartEmptyError,
    InvalidCustomizationError,
    OrderPlacementError,
)


def make_gateway(result=None, side_effect=None):
    gateway = MagicMock(spec=OrderGateway)
    gateway.submit_order = AsyncMock(return_value=result, side_effect=side_effect)
    return gateway


class TestCartManagementUseCase:
    """Test cart management use case"""

    def test_add_to_cart_from_api_payload(self, engine):
        use_case = CartManagementUseCase(engine)
        payload = {"_id": "dish-1", "restaurantId": "r1", "name": "Biryani", "price": "₹250"}

        response = use_case.add_to_cart(AddToCartRequest(offering=payload, quantity=2))

        assert response.success is True
        assert response.identity_key == "plain:dish-1"
        assert response.cart_summary.total_items == 2
        assert response.cart_summary.total_amount == 500.0
        assert response.cart_summary.items[0].name == "Biryani"

    def test_add_customized_offering(self, engine, pizza, check_invariants):
        use_case = CartManagementUseCase(engine)
        customization = build_customization(pizza, "large", "hot", "", 2)

        response = use_case.add_to_cart(AddToCartRequest(pizza, 2, customization))

        assert response.success is True
        item = response.cart_summary.items[0]
        assert item.unit_price == 400.0
        assert item.total_price == 800.0
        assert item.customization["size"] == "large"
        assert use_case.badge_quantity("pizza", customization) == 2
        assert use_case.badge_quantity("pizza") == 0
        check_invariants(engine)

    def test_add_to_cart_invalid_quantity(self, engine, dish_x):
        use_case = CartManagementUseCase(engine)

        response = use_case.add_to_cart(AddToCartRequest(dish_x, 0))

        assert response.success is False
        assert response.error_code == "VALIDATION_ERROR"
        assert response.error_message
        assert engine.is_empty()

    def test_add_to_cart_malformed_payload(self, engine):
        use_case = CartManagementUseCase(engine)

        for offering in ({"_id": "x", "name": "Mystery"}, None):
            response = use_case.add_to_cart(AddToCartRequest(offering, 1))
            assert response.success is False
        assert engine.is_empty()

    def test_update_and_remove(self, engine, dish_x, pizza, check_invariants):
        use_case = CartManagementUseCase(engine)
        use_case.add_to_cart(AddToCartRequest(dish_x, 1))
        use_case.add_to_cart(AddToCartRequest(pizza, 1))

        response = use_case.update_quantity(UpdateQuantityRequest("plain:dish-x", 3))
        assert response.success is True
        assert response.cart_summary.total_items == 4

        response = use_case.remove_line("plain:pizza")
        assert response.cart_summary.total_amount == 600.0
        response = use_case.remove_line("plain:pizza")
        assert response.success is True
        assert response.cart_summary.total_amount == 600.0
        check_invariants(engine)

    def test_update_quantity_invalid(self, engine, dish_x):
        use_case = CartManagementUseCase(engine)
        use_case.add_to_cart(AddToCartRequest(dish_x, 1))

        response = use_case.update_quantity(UpdateQuantityRequest("plain:dish-x", "many"))

        assert response.success is False
        assert engine.quantity_for_identity("plain:dish-x") == 1

    def test_customize_respects_max_quantity(self, engine, pizza):
        use_case = CartManagementUseCase(engine, max_customization_quantity=3)

        customization = use_case.customize(pizza, "large", "hot", quantity=3)
        assert customization.total_price == Money(1200)
        with pytest.raises(InvalidCustomizationError):
            use_case.customize(pizza, quantity=4)

    def test_clear_and_get_cart(self, engine, dish_x):
        use_case = CartManagementUseCase(engine)
        use_case.add_to_cart(AddToCartRequest(dish_x, 2))

        assert use_case.get_cart().cart_summary.total_items == 2
        response = use_case.clear_cart()
        assert response.cart_summary.items == []
        assert response.cart_summary.total_amount == 0.0
        assert response.cart_summary.currency == "INR"


class TestCheckoutUseCase:
    """Test checkout use case"""

    def test_validate_empty_cart(self, engine):
        validation = CheckoutUseCase(engine, make_gateway()).validate_cart()
        assert validation.is_valid is False
        assert "Cart is empty" in validation.errors

    def test_validate_unavailable_and_mixed_restaurants(self, engine, dish_x, offering_factory):
        engine.add_item(dish_x, 1)
        engine.add_item(offering_factory("kulfi", 90, "Kulfi", restaurant_id="r2", is_available=False), 1)

        validation = CheckoutUseCase(engine, make_gateway()).validate_cart()

        assert validation.is_valid is False
        assert 'Item "Kulfi" is not available' in validation.errors
        assert "Cart contains items from more than one restaurant" in validation.errors

    def test_build_order_request(self, engine, dish_x, pizza):
        engine.add_item(dish_x, 2)
        engine.add_item(pizza, 1, build_customization(pizza, "small", "medium"))
        use_case = CheckoutUseCase(engine, make_gateway(), delivery_fee=Decimal("40"))

        request = use_case.build_order_request("12 MG Road", "Ring twice")

        assert request.restaurant_id == "r1"
        assert request.restaurant_name == "Spice Garden"
        assert request.subtotal == 650.0
        assert request.delivery_fee == 40.0
        assert request.total == 690.0
        first, second = request.items
        assert (first.item_id, first.price, first.quantity, first.total_price) == ("dish-x", "₹200", 2, "₹400")
        assert first.customization is None
        assert second.customization == {"size": "small", "spiceLevel": "medium"}

        payload = request.to_payload()
        assert payload["restaurantName"] == "Spice Garden"
        assert payload["deliveryFee"] == 40.0
        assert payload["deliveryInstructions"] == "Ring twice"
        assert payload["items"][1]["customization"]["size"] == "small"
        assert "customization" not in payload["items"][0]

    def test_build_order_request_empty_cart(self, engine):
        with pytest.raises(CartEmptyError):
            CheckoutUseCase(engine, make_gateway()).build_order_request("12 MG Road")

    @pytest.mark.asyncio
    async def test_place_order_success_clears_cart(self, engine, dish_x):
        engine.add_item(dish_x, 3)
        gateway = make_gateway(OrderConfirmation(confirmed=True, order_id="ord-1"))
        use_case = CheckoutUseCase(engine, gateway, delivery_fee=Decimal("40"))

        response = await use_case.place_order("12 MG Road")

        assert response.success is True
        assert response.order_id == "ord-1"
        assert response.order_request.total == 640.0
        gateway.submit_order.assert_awaited_once()
        assert engine.is_empty()
        assert engine.snapshot().total_amount == Money(0)

    @pytest.mark.asyncio
    async def test_place_order_gateway_failure_keeps_cart(self, engine, dish_x):
        engine.add_item(dish_x, 1)
        gateway = make_gateway(side_effect=OrderPlacementError("503 from order service"))

        response = await CheckoutUseCase(engine, gateway).place_order("12 MG Road")

        assert response.success is False
        assert response.error_message == OrderPlacementError().user_message
        assert engine.quantity_for_identity("plain:dish-x") == 1

    @pytest.mark.asyncio
    async def test_place_order_network_error_keeps_cart(self, engine, dish_x):
        engine.add_item(dish_x, 1)
        gateway = make_gateway(side_effect=ConnectionError("offline"))

        response = await CheckoutUseCase(engine, gateway).place_order("12 MG Road")

        assert response.success is False
        assert not engine.is_empty()

    @pytest.mark.asyncio
    async def test_place_order_unconfirmed_keeps_cart(self, engine, dish_x):
        engine.add_item(dish_x, 1)
        gateway = make_gateway(OrderConfirmation(confirmed=False, message="Restaurant closed"))

        response = await CheckoutUseCase(engine, gateway).place_order("12 MG Road")

        assert response.success is False
        assert response.error_message == "Restaurant closed"
        assert engine.snapshot().total_items == 1

    @pytest.mark.asyncio
    async def test_place_order_invalid_cart_skips_gateway(self, engine):
        gateway = make_gateway()

        response = await CheckoutUseCase(engine, gateway).place_order("12 MG Road")

        assert response.success is False
        assert response.errors == ["Cart is empty"]
        gateway.submit_order.assert_not_awaited()
