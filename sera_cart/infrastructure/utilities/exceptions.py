"""
Custom exceptions for the Sera cart engine
"""


class CartError(Exception):
    """Base exception for cart operations"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "Something went wrong with your cart. Please try again."
        self.error_code = error_code or "CART_ERROR"


class PreconditionViolation(CartError):
    """A caller passed input the cart engine does not accept"""

    def __init__(self, message: str, field: str = None, user_message: str = None):
        super().__init__(message, user_message or message, "VALIDATION_ERROR")
        self.field = field


class InvalidQuantityError(PreconditionViolation):
    """Quantity is not a positive integer"""

    def __init__(self, quantity):
        super().__init__(
            f"Quantity must be a positive integer, got {quantity!r}",
            "quantity",
            "Please choose at least one item.",
        )
        self.quantity = quantity


class InvalidCustomizationError(PreconditionViolation):
    """Customization cannot be priced or is out of range"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, field, "This customization is not available.")


class MalformedOfferingError(PreconditionViolation):
    """Menu offering is missing an identifier or a parseable price"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, field, "This dish cannot be added right now.")


class PriceConflictError(CartError):
    """The same line identity resolved to two different unit prices"""

    def __init__(self, identity_key: str, existing_price, incoming_price):
        super().__init__(
            f"Price conflict for {identity_key}: existing {existing_price}, incoming {incoming_price}",
            "The price of this dish changed. Please review your cart.",
            "PRICE_CONFLICT",
        )
        self.identity_key = identity_key


class CartEmptyError(CartError):
    """Cart is empty when operation requires items"""

    def __init__(self):
        super().__init__(
            "Cart is empty", "Your cart is empty. Please add some items first.", "CART_EMPTY"
        )


class OrderPlacementError(CartError):
    """Order could not be placed by the order backend"""

    def __init__(self, reason: str = None):
        super().__init__(
            f"Order placement failed: {reason}",
            "Sorry, we couldn't place your order. Please try again.",
            "ORDER_PLACEMENT_ERROR",
        )
        self.reason = reason


def validate_and_raise(condition: bool, error_class: type, *args, **kwargs):
    """Helper function to validate condition and raise specific error"""
    if not condition:
        raise error_class(*args, **kwargs)


def is_whole_number(value) -> bool:
    """True for ints; bools are not quantities"""
    return isinstance(value, int) and not isinstance(value, bool)
