"""
Customization options

Size and spice choices offered when a customer customizes a dish, and the
pricing that produces a Customization ready to be added to the cart.
"""

from dataclasses import dataclass
from decimal import Decimal

from sera_cart.domain.entities.menu_offering import MenuOffering
from sera_cart.domain.value_objects.customization import Customization
from sera_cart.domain.value_objects.money import Money
from sera_cart.infrastructure.utilities.exceptions import (
    InvalidCustomizationError,
    is_whole_number,
    validate_and_raise,
)

DEFAULT_SIZE = "medium"
DEFAULT_SPICE_LEVEL = "mild"
MAX_CUSTOMIZATION_QUANTITY = 10


@dataclass(frozen=True)
class SizeOption:
    """A size choice and the amount it adds to (or takes off) the base price"""

    id: str
    name: str
    price_adjustment: Decimal
    description: str = ""


@dataclass(frozen=True)
class SpiceLevel:
    """A spice level choice"""

    id: str
    name: str
    description: str = ""


SIZE_OPTIONS = {
    "small": SizeOption("small", "Small", Decimal("-50"), "Perfect for light meals"),
    "medium": SizeOption("medium", "Medium", Decimal("0"), "Standard size"),
    "large": SizeOption("large", "Large", Decimal("100"), "Extra portions"),
}

SPICE_LEVELS = {
    "mild": SpiceLevel("mild", "Mild", "No spice"),
    "medium": SpiceLevel("medium", "Medium", "Light spice"),
    "hot": SpiceLevel("hot", "Hot", "Spicy"),
    "extra-hot": SpiceLevel("extra-hot", "Extra Hot", "Very spicy"),
}


def price_for_size(offering: MenuOffering, size: str) -> Money:
    """Per-unit price of an offering in the given size"""
    option = SIZE_OPTIONS.get(size)
    if option is None:
        raise InvalidCustomizationError(f"Unknown size: {size!r}", "size")

    amount = offering.base_price.amount + option.price_adjustment
    if amount < 0:
        raise InvalidCustomizationError(
            f"Size {size} would make {offering.id} cost less than nothing", "size"
        )
    return Money(amount, offering.base_price.currency)


def build_customization(
    offering: MenuOffering,
    size: str = DEFAULT_SIZE,
    spice_level: str = DEFAULT_SPICE_LEVEL,
    special_instructions: str = "",
    quantity: int = 1,
    max_quantity: int = MAX_CUSTOMIZATION_QUANTITY,
) -> Customization:
    """Price a customization: (base price + size adjustment) x quantity"""
    if spice_level not in SPICE_LEVELS:
        raise InvalidCustomizationError(f"Unknown spice level: {spice_level!r}", "spice_level")
    validate_and_raise(
        is_whole_number(quantity) and 1 <= quantity <= max_quantity,
        InvalidCustomizationError,
        f"Quantity must be between 1 and {max_quantity}, got {quantity!r}",
        "configured_quantity",
    )

    unit_price = price_for_size(offering, size)
    return Customization(
        size=size,
        spice_level=spice_level,
        special_instructions=special_instructions,
        configured_quantity=quantity,
        total_price=unit_price * quantity,
    )
