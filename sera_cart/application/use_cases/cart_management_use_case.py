"""
Cart management use case

Handles the cart operations dispatched by the menu and cart-drawer surfaces.
"""

import logging
from typing import Optional, Union

from sera_cart.application.dtos.cart_dtos import (
    AddToCartRequest,
    CartOperationResponse,
    CartSummary,
    UpdateQuantityRequest,
)
from sera_cart.domain.cart_engine import CartEngine
from sera_cart.domain.customization_options import (
    DEFAULT_SIZE,
    DEFAULT_SPICE_LEVEL,
    MAX_CUSTOMIZATION_QUANTITY,
    build_customization,
)
from sera_cart.domain.entities.menu_offering import MenuOffering
from sera_cart.domain.value_objects.customization import Customization
from sera_cart.domain.value_objects.offering_id import OfferingId
from sera_cart.infrastructure.utilities.exceptions import CartError, MalformedOfferingError


class CartManagementUseCase:
    """
    Use case for cart management operations

    Handles:
    1. Adding items to cart
    2. Removing lines from cart
    3. Updating line quantities
    4. Getting cart summary
    5. Clearing cart
    """

    def __init__(self, cart_engine: CartEngine, max_customization_quantity: int = MAX_CUSTOMIZATION_QUANTITY):
        self._cart = cart_engine
        self._max_customization_quantity = max_customization_quantity
        self._logger = logging.getLogger(self.__class__.__name__)

    def add_to_cart(self, request: AddToCartRequest) -> CartOperationResponse:
        """Add an offering (optionally customized) to the cart"""
        self._logger.info("🛒 CART USE CASE: Adding to cart - Qty: %s", request.quantity)

        try:
            offering = self._resolve_offering(request.offering)
            line = self._cart.add_item(offering, request.quantity, request.customization)
        except CartError as e:
            self._logger.error("💥 VALIDATION ERROR adding to cart: %s", e)
            return CartOperationResponse(
                success=False, error_message=e.user_message, error_code=e.error_code
            )

        summary = self._summary()
        self._logger.info(
            "📊 CART SUMMARY: %d lines, %d items, total: %s",
            len(summary.items),
            summary.total_items,
            summary.total_amount,
        )
        return CartOperationResponse(success=True, cart_summary=summary, identity_key=line.identity_key)

    def remove_line(self, identity_key: str) -> CartOperationResponse:
        """Remove a cart line; removing an absent line still succeeds"""
        removed = self._cart.remove_line(identity_key)
        if removed is None:
            self._logger.info("🗑️ REMOVE LINE: %s not in cart, nothing to do", identity_key)
        else:
            self._logger.info("🗑️ REMOVE LINE: %s (%d items)", identity_key, removed.quantity)
        return CartOperationResponse(success=True, cart_summary=self._summary(), identity_key=identity_key)

    def update_quantity(self, request: UpdateQuantityRequest) -> CartOperationResponse:
        """Set a line's quantity from the cart drawer's +/- controls"""
        self._logger.info("🔄 UPDATE QUANTITY: %s -> %s", request.identity_key, request.quantity)

        try:
            self._cart.set_quantity(request.identity_key, request.quantity)
        except CartError as e:
            self._logger.error("💥 UPDATE QUANTITY ERROR: %s", e)
            return CartOperationResponse(
                success=False, error_message=e.user_message, error_code=e.error_code
            )

        return CartOperationResponse(
            success=True, cart_summary=self._summary(), identity_key=request.identity_key
        )

    def clear_cart(self) -> CartOperationResponse:
        """Clear the cart; confirmation is up to the caller"""
        self._cart.clear()
        self._logger.info("✅ CART CLEARED")
        return CartOperationResponse(success=True, cart_summary=self._summary())

    def get_cart(self) -> CartOperationResponse:
        """Get the current cart summary"""
        return CartOperationResponse(success=True, cart_summary=self._summary())

    def customize(
        self,
        offering: MenuOffering,
        size: str = DEFAULT_SIZE,
        spice_level: str = DEFAULT_SPICE_LEVEL,
        special_instructions: str = "",
        quantity: int = 1,
    ) -> Customization:
        """Price the customization step's choices for the configured quantity"""
        return build_customization(
            offering, size, spice_level, special_instructions, quantity, self._max_customization_quantity
        )

    def badge_quantity(
        self, offering_id: Union[OfferingId, str], customization: Optional[Customization] = None
    ) -> int:
        """How many of this (possibly customized) offering are in the cart"""
        return self._cart.quantity_for_offering(offering_id, customization)

    def _resolve_offering(self, offering) -> MenuOffering:
        if isinstance(offering, MenuOffering):
            return offering
        if not isinstance(offering, dict):
            raise MalformedOfferingError(f"Cannot add {type(offering).__name__} to the cart")
        return MenuOffering.from_api(offering, self._cart.currency)

    def _summary(self) -> CartSummary:
        return CartSummary.from_snapshot(self._cart.snapshot())
