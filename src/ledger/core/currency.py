#!/usr/bin/env python3
"""
Currency Parsing and Display Utilities

Amount handling for the client ledger engine.
All balance arithmetic uses Decimal so repeated deposits, withdrawals and
disputes never accumulate binary floating-point drift.

Precision Rules:
- Input amounts are parsed exactly as written (no rounding on the way in)
- Balances keep full precision for the whole run
- Rounding to 4 fractional digits happens only when rendering output

Key Principles:
- Never use float for currency calculations
- Round half away from zero at the display boundary
- Validate balances with an exact sum check
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

DISPLAY_PLACES = 4


def parse_amount(amount_str: str | None) -> Decimal | None:
    """
    Parse a decimal amount from a feed field.

    Args:
        amount_str: Raw field text, possibly padded with whitespace

    Returns:
        Exact Decimal value, or None when the field is empty

    Raises:
        ValueError: If the text is not a finite decimal number

    Examples:
        parse_amount(" 1.5 ") -> Decimal("1.5")
        parse_amount("") -> None
        parse_amount("abc") -> ValueError
    """
    if amount_str is None:
        return None

    clean = str(amount_str).strip()
    if not clean:
        return None

    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount_str!r}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount_str!r}")

    return value


def round_for_display(value: Decimal, places: int = DISPLAY_PLACES) -> Decimal:
    """
    Round a balance to a fixed number of fractional digits.

    Uses round-half-away-from-zero so 0.00005 becomes 0.0001 and
    -0.00005 becomes -0.0001.

    Args:
        value: Balance to round
        places: Number of fractional digits to keep

    Returns:
        Rounded Decimal
    """
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, places: int = DISPLAY_PLACES) -> str:
    """
    Format a balance for the output table.

    Rounds to `places` digits, drops trailing zeros and always keeps at
    least one fractional digit.

    Examples:
        format_amount(Decimal("8")) -> "8.0"
        format_amount(Decimal("2.50")) -> "2.5"
        format_amount(Decimal("1.23456")) -> "1.2346"
        format_amount(Decimal("-0.00001")) -> "0.0"
    """
    rounded = round_for_display(value, places)

    # -0 renders as 0
    if rounded.is_zero():
        return "0.0"

    text = format(rounded.normalize(), "f")
    if "." not in text:
        text += ".0"
    return text


def validate_balance(available: Decimal, held: Decimal, total: Decimal) -> bool:
    """
    Check that an account's balance components are consistent.

    Args:
        available: Funds usable for withdrawal
        held: Funds frozen by open disputes
        total: Total funds associated with the client

    Returns:
        True if total equals available plus held exactly
    """
    return total == available + held
