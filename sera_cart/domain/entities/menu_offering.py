"""
Menu offering entity

A catalog entry as delivered by the restaurant backend. The cart reads it and
never changes it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sera_cart.domain.value_objects.money import DEFAULT_CURRENCY, Money
from sera_cart.domain.value_objects.offering_id import OfferingId
from sera_cart.infrastructure.utilities.exceptions import MalformedOfferingError


@dataclass(frozen=True)
class MenuOffering:
    """Menu offering entity"""

    id: OfferingId
    name: str
    base_price: Money
    restaurant_id: str = ""
    restaurant_name: str = ""
    category: str = ""
    dietary: Optional[str] = None
    is_available: bool = True

    @classmethod
    def from_api(cls, payload: Dict[str, Any], currency: str = DEFAULT_CURRENCY) -> "MenuOffering":
        """Build an offering from a backend menu-item payload"""
        raw_id = payload.get("_id") or payload.get("id")
        try:
            offering_id = OfferingId(raw_id)
        except ValueError as exc:
            raise MalformedOfferingError(f"Menu item has no usable id: {raw_id!r}", "id") from exc

        name = payload.get("name")
        if not name:
            raise MalformedOfferingError(f"Menu item {offering_id} has no name", "name")

        raw_price = payload.get("price")
        try:
            base_price = Money.from_display(raw_price, currency)
        except ValueError as exc:
            raise MalformedOfferingError(
                f"Menu item {offering_id} has an unparseable price: {raw_price!r}", "price"
            ) from exc

        return cls(
            id=offering_id,
            name=name,
            base_price=base_price,
            restaurant_id=payload.get("restaurantId", ""),
            restaurant_name=payload.get("restaurantName", ""),
            category=payload.get("category", ""),
            dietary=payload.get("dietary"),
            is_available=bool(payload.get("isAvailable", True)),
        )
