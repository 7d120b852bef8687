"""Display formatting for addresses, token amounts and currency."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation


def format_address(address: str) -> str:
    """Shorten ``0x1234...abcd`` style."""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_token_balance(raw: str | int | float | None, decimals: int) -> float:
    """Convert a smallest-unit amount (wei, satoshi-like) to display units.

    Unparseable input counts as zero.
    """
    if raw is None or raw == "":
        return 0.0
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return 0.0
    return float(value.scaleb(-decimals))


DEFAULT_DECIMALS = 18


def token_decimals(value: int | str | None, default: int = DEFAULT_DECIMALS) -> int:
    """Decimals from token metadata; *default* only when the field is missing.

    Zero is a real value (indivisible tokens) and is kept.
    """
    if value is None or value == "":
        return default
    return int(value)


def format_token_balance_display(
    raw: str | int | float | None, decimals: int, display_decimals: int = 5
) -> str:
    return f"{format_token_balance(raw, decimals):.{display_decimals}f}"


def format_currency(amount: float, currency: str = "USD") -> str:
    symbol = "$" if currency.upper() == "USD" else ""
    sign = "-" if amount < 0 else ""
    text = f"{sign}{symbol}{abs(amount):,.2f}"
    return text if symbol else f"{text} {currency.upper()}"
