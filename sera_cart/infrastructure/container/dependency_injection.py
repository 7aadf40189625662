"""
Dependency Injection Container

Owns the cart for one client session and wires the use cases that read and
mutate it. Screens receive the session (or its use cases) explicitly; there is
no module-level cart.
"""

import logging
from typing import Any, Dict, Optional

from sera_cart.application.use_cases.cart_management_use_case import CartManagementUseCase
from sera_cart.application.use_cases.checkout_use_case import CheckoutUseCase, OrderGateway
from sera_cart.domain.cart_engine import CartEngine
from sera_cart.infrastructure.configuration.config import Settings, get_config


class CartSession:
    """
    Cart owner with explicit lifecycle

    - init(): create an empty cart (application start, login)
    - teardown(): clear and release it (logout)
    """

    def __init__(self, config: Optional[Settings] = None, order_gateway: Optional[OrderGateway] = None):
        self._config = config or get_config()
        self._order_gateway = order_gateway
        self._instances: Dict[str, Any] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_active(self) -> bool:
        return "cart_engine" in self._instances

    def init(self) -> "CartSession":
        """Create a fresh, empty cart and its use cases"""
        if self.is_active:
            self._logger.debug("Cart session already initialized")
            return self

        engine = CartEngine(
            currency=self._config.currency,
            strict_price_merge=self._config.strict_price_merge,
        )
        self._instances["cart_engine"] = engine
        self._instances["cart_management_use_case"] = CartManagementUseCase(
            engine, self._config.max_customization_quantity
        )
        self._logger.info("Cart session initialized (currency %s)", engine.currency)
        return self

    def teardown(self) -> None:
        """Empty the cart and drop every instance bound to it"""
        engine = self._instances.get("cart_engine")
        if engine is not None:
            engine.clear()
        self._instances.clear()
        self._logger.info("Cart session torn down")

    def set_order_gateway(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway
        self._instances.pop("checkout_use_case", None)

    def get_cart_engine(self) -> CartEngine:
        return self._get("cart_engine")

    def get_cart_management_use_case(self) -> CartManagementUseCase:
        return self._get("cart_management_use_case")

    def get_checkout_use_case(self) -> CheckoutUseCase:
        """Get checkout use case; needs an order gateway"""
        if "checkout_use_case" not in self._instances:
            if self._order_gateway is None:
                raise RuntimeError("No order gateway configured for checkout")
            self._instances["checkout_use_case"] = CheckoutUseCase(
                self.get_cart_engine(),
                self._order_gateway,
                delivery_fee=self._config.delivery_fee,
                currency_symbol=self._config.currency_symbol,
            )
        return self._instances["checkout_use_case"]

    def get_config(self) -> Settings:
        return self._config

    def _get(self, name: str) -> Any:
        if not self.is_active:
            raise RuntimeError("Cart session is not initialized; call init() first")
        return self._instances[name]

    def __enter__(self) -> "CartSession":
        return self.init()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.teardown()
        return False
