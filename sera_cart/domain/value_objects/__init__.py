"""
Domain value objects package

Contains immutable value objects that represent concepts in the cart domain.
"""

from .customization import Customization
from .money import Money
from .offering_id import OfferingId

__all__ = [
    "Customization",
    "Money",
    "OfferingId",
]
