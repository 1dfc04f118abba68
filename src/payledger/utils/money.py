"""Money parsing and formatting utilities.

Amounts are carried as integer minor units (cents) everywhere inside the
ledger. These helpers are the only place where decimals and display strings
are converted to and from cents.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from payledger.domain.errors import ValidationError

DEFAULT_CURRENCY_SYMBOL = "RD$"

_CENT = Decimal("0.01")
_CURRENCY_SYMBOLS = re.compile(r"RD\$|[$€£¥]")


def to_minor_units(amount: Decimal | int | str) -> int:
    """Convert a decimal amount to integer cents.

    Args:
        amount: Amount in major units (e.g. Decimal("12.34") or "12.34")

    Returns:
        Amount in cents

    Raises:
        ValidationError: If the amount is not a finite number or carries
            fractions of a cent
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount}'")

    if not value.is_finite():
        raise ValidationError(f"Amount must be a finite number, got '{amount}'")
    if value != value.quantize(_CENT):
        raise ValidationError(f"Amount '{amount}' has fractions of a cent")

    return int(value * 100)


def from_minor_units(cents: int) -> Decimal:
    """Convert integer cents back to a Decimal in major units."""
    return (Decimal(cents) / 100).quantize(_CENT)


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into cents.

    Handles various formats:
    - "123.45"
    - "RD$ 1,500"
    - "$123.45"
    - "-123.45"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Amount in cents

    Raises:
        ValidationError: If the string cannot be parsed or has fractional cents
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = _CURRENCY_SYMBOLS.sub("", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount_str}'")

    cents = to_minor_units(amount)
    return -cents if is_negative else cents


def format_currency(
    cents: int, show_decimals: bool = False, symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> str:
    """Format cents for display, e.g. ``RD$ 1,500`` or ``RD$ 1,500.25``."""
    amount = from_minor_units(abs(cents))
    if show_decimals:
        body = f"{amount:,.2f}"
    else:
        body = f"{amount.quantize(Decimal(1), rounding=ROUND_HALF_UP):,}"
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol} {body}"


def format_compact_currency(cents: int, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format cents compactly, e.g. ``RD$ 15.4K`` or ``RD$ 1.2M``."""
    amount = from_minor_units(cents)
    tenth = Decimal("0.1")
    if amount >= 1_000_000:
        return f"{symbol} {(amount / 1_000_000).quantize(tenth, rounding=ROUND_HALF_UP)}M"
    if amount >= 1_000:
        return f"{symbol} {(amount / 1_000).quantize(tenth, rounding=ROUND_HALF_UP)}K"
    return format_currency(cents, symbol=symbol)
