"""
Use Cases

Each use case represents a single surface of the client that talks to the cart.
"""

from .cart_management_use_case import CartManagementUseCase
from .checkout_use_case import CheckoutUseCase, OrderGateway

__all__ = [
    "CartManagementUseCase",
    "CheckoutUseCase",
    "OrderGateway",
]
