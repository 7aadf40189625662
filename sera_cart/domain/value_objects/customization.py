"""
Customization value object

A customer-chosen variant of a menu offering (size, spice level, instructions)
together with the price the customization step computed for its quantity.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .money import Money


@dataclass(frozen=True)
class Customization:
    """Customization value object"""

    size: str
    spice_level: str
    special_instructions: str = ""
    configured_quantity: Optional[int] = 1
    total_price: Optional[Money] = None

    def __post_init__(self):
        """Normalize free-text instructions so stray whitespace is not a new variant"""
        object.__setattr__(self, "special_instructions", (self.special_instructions or "").strip())

    def identity_fields(self) -> Tuple[str, str, str]:
        """Fields that decide whether two customizations are the same variant"""
        return (self.size, self.spice_level, self.special_instructions)

    def is_equivalent(self, other: "Customization") -> bool:
        """Equivalent customizations ignore quantity and computed price"""
        if not isinstance(other, Customization):
            return False
        return self.identity_fields() == other.identity_fields()

    def to_order_dict(self) -> dict:
        """Server-facing description of the chosen variant"""
        return {
            "size": self.size,
            "spiceLevel": self.spice_level,
            "specialInstructions": self.special_instructions,
        }
