"""
Checkout use case

Turns one cart snapshot into an order request, hands it to the order backend
and empties the cart once the order is confirmed.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from sera_cart.application.dtos.cart_dtos import (
    CheckoutValidation,
    CreateOrderRequest,
    OrderConfirmation,
    OrderItemRequest,
    OrderPlacementResponse,
)
from sera_cart.domain.cart_engine import CartEngine, CartLine, CartSnapshot
from sera_cart.domain.value_objects.money import Money
from sera_cart.infrastructure.logging.logging_config import PerformanceLogger, get_structured_logger
from sera_cart.infrastructure.utilities.exceptions import CartEmptyError, OrderPlacementError


class OrderGateway(ABC):
    """Order backend the checkout talks to (HTTP, auth and retries live behind it)"""

    @abstractmethod
    async def submit_order(self, request: CreateOrderRequest) -> OrderConfirmation:
        """Submit an order; raise OrderPlacementError when the backend refuses it"""


class CheckoutUseCase:
    """Use case for placing an order from the cart"""

    def __init__(
        self,
        cart_engine: CartEngine,
        order_gateway: OrderGateway,
        delivery_fee: Decimal = Decimal("0"),
        currency_symbol: str = "₹",
    ):
        self._cart = cart_engine
        self._order_gateway = order_gateway
        self._delivery_fee = Money(delivery_fee, cart_engine.currency)
        self._currency_symbol = currency_symbol
        self._logger = logging.getLogger(self.__class__.__name__)
        self._audit = get_structured_logger("sera_cart.checkout")

    def validate_cart(self, snapshot: Optional[CartSnapshot] = None) -> CheckoutValidation:
        """Check the cart can be turned into a single order"""
        snapshot = snapshot or self._cart.snapshot()
        errors: List[str] = []

        if snapshot.is_empty:
            errors.append("Cart is empty")

        for line in snapshot.lines:
            if not line.is_available:
                errors.append(f'Item "{line.name}" is not available')

        restaurants = {line.restaurant_id for line in snapshot.lines}
        if len(restaurants) > 1:
            errors.append("Cart contains items from more than one restaurant")

        return CheckoutValidation(is_valid=not errors, errors=errors)

    def build_order_request(
        self,
        delivery_address: str,
        delivery_instructions: Optional[str] = None,
        snapshot: Optional[CartSnapshot] = None,
    ) -> CreateOrderRequest:
        """Map the cart snapshot onto the order backend's request shape"""
        snapshot = snapshot or self._cart.snapshot()
        if snapshot.is_empty:
            raise CartEmptyError()

        subtotal = snapshot.total_amount
        total = subtotal + self._delivery_fee
        return CreateOrderRequest(
            restaurant_id=snapshot.lines[0].restaurant_id,
            restaurant_name=snapshot.lines[0].restaurant_name,
            items=[self._order_item(line) for line in snapshot.lines],
            subtotal=float(subtotal.amount),
            delivery_fee=float(self._delivery_fee.amount),
            total=float(total.amount),
            delivery_address=delivery_address,
            delivery_instructions=delivery_instructions,
        )

    async def place_order(
        self, delivery_address: str, delivery_instructions: Optional[str] = None
    ) -> OrderPlacementResponse:
        """Validate, submit and, on confirmation, clear the cart"""
        snapshot = self._cart.snapshot()
        self._logger.info(
            "📦 PLACE ORDER: %d lines, %d items, total %s",
            len(snapshot.lines),
            snapshot.total_items,
            snapshot.total_amount,
        )

        validation = self.validate_cart(snapshot)
        if not validation.is_valid:
            self._logger.warning("❌ CHECKOUT VALIDATION FAILED: %s", "; ".join(validation.errors))
            return OrderPlacementResponse(
                success=False, error_message="Cart is not ready for checkout", errors=validation.errors
            )

        request = self.build_order_request(delivery_address, delivery_instructions, snapshot)

        try:
            with PerformanceLogger("submit_order", self._logger):
                confirmation = await self._order_gateway.submit_order(request)
        except (OrderPlacementError, ConnectionError, TimeoutError) as e:
            self._logger.error("💥 ORDER SUBMISSION FAILED: %s", e)
            user_message = e.user_message if isinstance(e, OrderPlacementError) else OrderPlacementError().user_message
            return OrderPlacementResponse(success=False, order_request=request, error_message=user_message)

        if not confirmation.confirmed:
            self._logger.warning("❌ ORDER NOT CONFIRMED: %s", confirmation.message)
            return OrderPlacementResponse(
                success=False,
                order_request=request,
                error_message=confirmation.message or OrderPlacementError().user_message,
            )

        self._cart.clear()
        self._audit.info(
            "order_placed",
            order_id=confirmation.order_id,
            restaurant_id=request.restaurant_id,
            total=request.total,
        )
        self._logger.info("✅ ORDER PLACED: %s", confirmation.order_id)
        return OrderPlacementResponse(success=True, order_id=confirmation.order_id, order_request=request)

    def _order_item(self, line: CartLine) -> OrderItemRequest:
        customization = None
        if line.customization is not None:
            customization = {
                "size": line.customization.size,
                "spiceLevel": line.customization.spice_level,
            }
        return OrderItemRequest(
            item_id=str(line.source_offering_id),
            name=line.name,
            price=line.unit_price.format_display(self._currency_symbol),
            quantity=line.quantity,
            total_price=line.line_total.format_display(self._currency_symbol),
            customization=customization,
        )
