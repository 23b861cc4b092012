#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper backed by an exact Decimal.
Prevents floating-point errors and provides type-safe balance operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import DISPLAY_PLACES, format_amount, parse_amount, round_for_display


@dataclass(frozen=True)
class Money:
    """
    Immutable money value with arbitrary decimal precision.

    Supports positive and negative amounts. An account's available balance
    can legitimately go negative when a withdrawal is disputed after the
    funds have already left.

    Examples:
        >>> deposit = Money.from_str("5.0")
        >>> str(deposit)
        '5.0'

        >>> withdrawal = Money.from_str("7.25")
        >>> str(deposit - withdrawal)
        '-2.25'

        >>> Money.from_str("1.23456").quantize()
        Money(amount=Decimal('1.2346'))
    """

    amount: Decimal

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(amount=Decimal(0))

    @classmethod
    def from_decimal(cls, amount: Decimal | int) -> "Money":
        """Create Money from a Decimal or integer."""
        return cls(amount=Decimal(amount))

    @classmethod
    def from_str(cls, amount_str: str) -> "Money":
        """
        Parse from a decimal string like '12.3456'.

        Args:
            amount_str: Decimal text, surrounding whitespace allowed

        Returns:
            Money object

        Raises:
            ValueError: If the text is empty or not a finite decimal
        """
        value = parse_amount(amount_str)
        if value is None:
            raise ValueError("Empty amount")
        return cls(amount=value)

    def to_decimal(self) -> Decimal:
        """Get the exact Decimal value."""
        return self.amount

    def is_positive(self) -> bool:
        """Check if the amount is strictly greater than zero."""
        return self.amount > 0

    def is_negative(self) -> bool:
        """Check if the amount is strictly less than zero."""
        return self.amount < 0

    def quantize(self, places: int = DISPLAY_PLACES) -> "Money":
        """Round to display precision."""
        return Money(amount=round_for_display(self.amount, places))

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(amount=self.amount - other.amount)

    def __neg__(self) -> "Money":
        """Negate."""
        return Money(amount=-self.amount)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.amount >= other.amount

    def __str__(self) -> str:
        """Format for display, rounded to 4 fractional digits."""
        return format_amount(self.amount)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(amount={self.amount!r})"
