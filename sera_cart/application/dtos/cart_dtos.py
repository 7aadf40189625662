"""
Cart DTOs

Data Transfer Objects for cart and checkout operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from sera_cart.domain.cart_engine import CartLine, CartSnapshot
from sera_cart.domain.entities.menu_offering import MenuOffering
from sera_cart.domain.value_objects.customization import Customization


@dataclass
class AddToCartRequest:
    """Request to add item to cart"""

    offering: Union[MenuOffering, Dict[str, Any]]
    quantity: int = 1
    customization: Optional[Customization] = None


@dataclass
class UpdateQuantityRequest:
    """Request to change a cart line's quantity"""

    identity_key: str
    quantity: int


@dataclass
class CartLineInfo:
    """Cart line information for display"""

    identity_key: str
    offering_id: str
    name: str
    quantity: int
    unit_price: float
    total_price: float
    customization: Optional[Dict[str, str]] = None

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineInfo":
        return cls(
            identity_key=line.identity_key,
            offering_id=str(line.source_offering_id),
            name=line.name,
            quantity=line.quantity,
            unit_price=float(line.unit_price.amount),
            total_price=float(line.line_total.amount),
            customization=line.customization.to_order_dict() if line.customization else None,
        )


@dataclass
class CartSummary:
    """Cart summary information"""

    items: List[CartLineInfo]
    total_items: int
    total_amount: float
    currency: str

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot) -> "CartSummary":
        return cls(
            items=[CartLineInfo.from_line(line) for line in snapshot.lines],
            total_items=snapshot.total_items,
            total_amount=float(snapshot.total_amount.amount),
            currency=snapshot.total_amount.currency,
        )


@dataclass
class CartOperationResponse:
    """Response for cart operations"""

    success: bool
    cart_summary: Optional[CartSummary] = None
    identity_key: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None


@dataclass
class OrderItemRequest:
    """One server-facing order line built from a cart line"""

    item_id: str
    name: str
    price: str
    quantity: int
    total_price: str
    customization: Optional[Dict[str, str]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "itemId": self.item_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "totalPrice": self.total_price,
        }
        if self.customization:
            payload["customization"] = self.customization
        return payload


@dataclass
class CreateOrderRequest:
    """Request sent to the order backend"""

    restaurant_id: str
    items: List[OrderItemRequest]
    subtotal: float
    delivery_fee: float
    total: float
    delivery_address: str
    delivery_instructions: Optional[str] = None
    restaurant_name: str = ""

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "restaurantId": self.restaurant_id,
            "restaurantName": self.restaurant_name,
            "items": [item.to_payload() for item in self.items],
            "subtotal": self.subtotal,
            "deliveryFee": self.delivery_fee,
            "total": self.total,
            "deliveryAddress": self.delivery_address,
        }
        if self.delivery_instructions:
            payload["deliveryInstructions"] = self.delivery_instructions
        return payload


@dataclass
class OrderConfirmation:
    """What the order backend returned"""

    confirmed: bool
    order_id: Optional[str] = None
    message: Optional[str] = None


@dataclass
class CheckoutValidation:
    """Result of checking the cart before placing an order"""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class OrderPlacementResponse:
    """Response from placing an order"""

    success: bool
    order_id: Optional[str] = None
    order_request: Optional[CreateOrderRequest] = None
    error_message: Optional[str] = None
    errors: List[str] = field(default_factory=list)
