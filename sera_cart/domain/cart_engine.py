"""
Cart aggregation engine

Holds the in-memory cart: the ordered set of distinct purchasable lines and the
two running aggregates (item count and amount). Every mutation builds a new
state and swaps it in with a single assignment, so readers never see a
half-applied change.
"""

import hashlib
import json
import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from sera_cart.domain.entities.menu_offering import MenuOffering
from sera_cart.domain.value_objects.customization import Customization
from sera_cart.domain.value_objects.money import DEFAULT_CURRENCY, Money
from sera_cart.domain.value_objects.offering_id import OfferingId
from sera_cart.infrastructure.utilities.exceptions import (
    InvalidCustomizationError,
    InvalidQuantityError,
    MalformedOfferingError,
    PriceConflictError,
    is_whole_number,
    validate_and_raise,
)

CATEGORY_ORDER = ("starters", "mains", "breads", "desserts", "beverages")


def derive_identity_key(offering_id: Union[OfferingId, str], customization: Optional[Customization] = None) -> str:
    """
    Derive the key that decides whether two adds land on the same cart line.

    Only size, spice level and special instructions take part; the fields are
    serialized as a JSON array so no instruction text can shift a boundary.
    """
    if customization is None:
        return f"plain:{offering_id}"

    serialized = json.dumps(list(customization.identity_fields()), ensure_ascii=False, separators=(",", ":"))
    fingerprint = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    return f"custom:{offering_id}:{fingerprint}"


def resolve_unit_price(offering: MenuOffering, customization: Optional[Customization] = None) -> Money:
    """Per-unit price: catalog price, or the customization total spread over its quantity"""
    if customization is None:
        return offering.base_price

    quantity = customization.configured_quantity
    validate_and_raise(
        is_whole_number(quantity) and quantity > 0,
        InvalidCustomizationError,
        f"Customization for {offering.id} has no usable configured quantity: {quantity!r}",
        "configured_quantity",
    )
    total = customization.total_price
    validate_and_raise(
        total is not None,
        InvalidCustomizationError,
        f"Customization for {offering.id} has no total price",
        "total_price",
    )

    # Unit prices are whole cents; a total that does not split evenly would drift.
    unit_price = total.divide(quantity)
    validate_and_raise(
        unit_price * quantity == total,
        InvalidCustomizationError,
        f"Customization total {total} for {offering.id} does not split into {quantity} equal units",
        "total_price",
    )
    return unit_price


@dataclass(frozen=True)
class CartLine:
    """One addressable row of the cart"""

    identity_key: str
    source_offering_id: OfferingId
    name: str
    unit_price: Money
    quantity: int
    restaurant_id: str = ""
    restaurant_name: str = ""
    category: str = ""
    is_available: bool = True
    customization: Optional[Customization] = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of the cart handed to menu, drawer and checkout"""

    lines: Tuple[CartLine, ...]
    total_items: int
    total_amount: Money

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class _CartState:
    lines: Mapping[str, CartLine]
    total_items: int
    total_amount: Money

    @classmethod
    def empty(cls, currency: str) -> "_CartState":
        return cls(MappingProxyType({}), 0, Money.zero(currency))


class CartEngine:
    """
    Authoritative cart for one client session

    Operations:
    1. add_item - merge into an existing line or append a new one
    2. remove_line - drop a line (no-op when absent)
    3. set_quantity - change a line's quantity, removing it at zero
    4. clear - empty the cart
    """

    def __init__(self, currency: str = DEFAULT_CURRENCY, strict_price_merge: bool = False):
        self._currency = currency.upper()
        self._strict_price_merge = strict_price_merge
        self._state = _CartState.empty(self._currency)
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def currency(self) -> str:
        return self._currency

    def add_item(
        self, offering: MenuOffering, quantity: int, customization: Optional[Customization] = None
    ) -> CartLine:
        """Add `quantity` units of an offering, merging with an identical line"""
        validate_and_raise(is_whole_number(quantity) and quantity > 0, InvalidQuantityError, quantity)
        self._validate_offering(offering)

        identity_key = derive_identity_key(offering.id, customization)
        unit_price = resolve_unit_price(offering, customization)
        if unit_price.currency != self._currency:
            raise MalformedOfferingError(
                f"{offering.id} is priced in {unit_price.currency}, cart uses {self._currency}", "base_price"
            )

        state = self._state
        existing = state.lines.get(identity_key)
        if existing is not None:
            if existing.unit_price != unit_price:
                if self._strict_price_merge:
                    raise PriceConflictError(identity_key, existing.unit_price, unit_price)
                self._logger.warning(
                    "Merged line %s keeps price %s, ignoring %s",
                    identity_key,
                    existing.unit_price,
                    unit_price,
                    extra={"identity_key": identity_key},
                )
            line = replace(existing, quantity=existing.quantity + quantity)
        else:
            line = CartLine(
                identity_key=identity_key,
                source_offering_id=offering.id,
                name=offering.name,
                unit_price=unit_price,
                quantity=quantity,
                restaurant_id=offering.restaurant_id,
                restaurant_name=offering.restaurant_name,
                category=offering.category,
                is_available=offering.is_available,
                customization=customization,
            )

        # Reassigning an existing key keeps its position in the dict.
        lines = dict(state.lines)
        lines[identity_key] = line
        self._state = _CartState(
            MappingProxyType(lines),
            state.total_items + quantity,
            state.total_amount + line.unit_price * quantity,
        )
        self._logger.debug(
            "Added %d x %s (line quantity %d)", quantity, identity_key, line.quantity,
            extra={"identity_key": identity_key},
        )
        return line

    def remove_line(self, identity_key: str) -> Optional[CartLine]:
        """Remove a line; returns the removed line, or None when it was absent"""
        state = self._state
        line = state.lines.get(identity_key)
        if line is None:
            return None

        lines = {key: value for key, value in state.lines.items() if key != identity_key}
        self._state = _CartState(
            MappingProxyType(lines),
            state.total_items - line.quantity,
            state.total_amount - line.line_total,
        )
        self._logger.debug("Removed line %s", identity_key, extra={"identity_key": identity_key})
        return line

    def set_quantity(self, identity_key: str, new_quantity: int) -> Optional[CartLine]:
        """Set a line's quantity; zero or less removes it. Never re-prices."""
        validate_and_raise(is_whole_number(new_quantity), InvalidQuantityError, new_quantity)

        state = self._state
        line = state.lines.get(identity_key)
        if line is None:
            return None
        if new_quantity <= 0:
            self.remove_line(identity_key)
            return None

        delta = new_quantity - line.quantity
        updated = replace(line, quantity=new_quantity)
        if delta >= 0:
            total_amount = state.total_amount + line.unit_price * delta
        else:
            total_amount = state.total_amount - line.unit_price * -delta

        lines = dict(state.lines)
        lines[identity_key] = updated
        self._state = _CartState(MappingProxyType(lines), state.total_items + delta, total_amount)
        self._logger.debug(
            "Set %s quantity %d -> %d", identity_key, line.quantity, new_quantity,
            extra={"identity_key": identity_key},
        )
        return updated

    def clear(self) -> None:
        """Empty the cart unconditionally"""
        self._state = _CartState.empty(self._currency)
        self._logger.debug("Cart cleared")

    def quantity_for_identity(self, identity_key: str) -> int:
        line = self._state.lines.get(identity_key)
        return line.quantity if line else 0

    def quantity_for_offering(
        self, offering_id: Union[OfferingId, str], customization: Optional[Customization] = None
    ) -> int:
        """Quantity shown on a menu badge for a (possibly customized) offering"""
        return self.quantity_for_identity(derive_identity_key(offering_id, customization))

    def get_line(self, identity_key: str) -> Optional[CartLine]:
        return self._state.lines.get(identity_key)

    def is_empty(self) -> bool:
        return not self._state.lines

    def snapshot(self) -> CartSnapshot:
        state = self._state
        return CartSnapshot(tuple(state.lines.values()), state.total_items, state.total_amount)

    def lines_by_restaurant(self) -> Dict[str, List[CartLine]]:
        groups: Dict[str, List[CartLine]] = {}
        for line in self._state.lines.values():
            groups.setdefault(line.restaurant_id, []).append(line)
        return groups

    def lines_sorted_by_category(self) -> List[CartLine]:
        """Lines in menu-course order; unknown categories go last"""

        def rank(line: CartLine) -> int:
            try:
                return CATEGORY_ORDER.index(line.category)
            except ValueError:
                return len(CATEGORY_ORDER)

        return sorted(self._state.lines.values(), key=rank)

    @staticmethod
    def _validate_offering(offering: MenuOffering):
        if not isinstance(getattr(offering, "id", None), OfferingId):
            raise MalformedOfferingError("Offering has no identifier", "id")
        if not isinstance(getattr(offering, "base_price", None), Money):
            raise MalformedOfferingError(f"Offering {offering.id} has no parseable base price", "base_price")
