"""
Money value object

Represents monetary amounts with currency handling.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

DEFAULT_CURRENCY = "INR"

_PRICE_PATTERN = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


@dataclass(frozen=True)
class Money:
    """
    Money value object that handles currency amounts properly
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        """Validate money object on creation"""
        if not isinstance(self.amount, Decimal):
            # Convert to Decimal for precise currency calculations
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

        # Round to 2 decimal places for currency
        rounded_amount = self.amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        object.__setattr__(self, "amount", rounded_amount)
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create zero money amount"""
        return cls(Decimal("0"), currency)

    @classmethod
    def from_display(cls, text: Union[str, int, float, Decimal], currency: str = DEFAULT_CURRENCY) -> "Money":
        """Parse a catalog price such as "₹1,200" """
        if isinstance(text, bool):
            raise ValueError(f"Cannot parse price from {text!r}")
        if isinstance(text, (int, float, Decimal)):
            try:
                return cls(Decimal(str(text)), currency)
            except InvalidOperation as exc:
                raise ValueError(f"Cannot parse price from {text!r}") from exc
        if not isinstance(text, str):
            raise ValueError(f"Cannot parse price from {text!r}")

        match = _PRICE_PATTERN.search(text)
        if match is None:
            raise ValueError(f"Cannot parse price from {text!r}")
        try:
            return cls(Decimal(match.group(0).replace(",", "")), currency)
        except InvalidOperation as exc:
            raise ValueError(f"Cannot parse price from {text!r}") from exc

    def add(self, other: "Money") -> "Money":
        """Add two money amounts"""
        self._check_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Subtract two money amounts"""
        self._check_currency(other, "subtract")
        result_amount = self.amount - other.amount
        if result_amount < 0:
            raise ValueError("Cannot have negative money amount")
        return Money(result_amount, self.currency)

    def multiply(self, factor: Union[int, Decimal]) -> "Money":
        """Multiply money by a factor"""
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        if factor < 0:
            raise ValueError("Cannot multiply money by negative factor")
        return Money(self.amount * factor, self.currency)

    def divide(self, divisor: int) -> "Money":
        """Split money evenly into `divisor` parts"""
        if divisor <= 0:
            raise ValueError("Divisor must be positive")
        return Money(self.amount / Decimal(divisor), self.currency)

    def is_zero(self) -> bool:
        """Check if amount is zero"""
        return self.amount == Decimal("0")

    def format_display(self, symbol: str = "₹") -> str:
        """Format for display to users"""
        if self.amount == self.amount.to_integral_value():
            return f"{symbol}{int(self.amount)}"
        return f"{symbol}{self.amount:.2f}"

    def _check_currency(self, other: "Money", operation: str):
        if self.currency != other.currency:
            raise ValueError(f"Cannot {operation} different currencies: {self.currency} and {other.currency}")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def __add__(self, other: "Money") -> "Money":
        """Add two money amounts using + operator"""
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two money amounts using - operator"""
        return self.subtract(other)

    def __mul__(self, factor: Union[int, Decimal]) -> "Money":
        """Multiply money by a factor using * operator"""
        return self.multiply(factor)

    def __rmul__(self, factor: Union[int, Decimal]) -> "Money":
        """Reverse multiply for factor * money"""
        return self.multiply(factor)
