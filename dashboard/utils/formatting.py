"""Display helpers for monetary values stored in minor units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MINOR_UNITS_PER_MAJOR = 100
_CENT = Decimal("0.01")


def to_major_units(amount: int | float | str | None) -> float:
    """Convert an amount stored in cents to dollars."""
    if amount is None:
        return 0.0
    return float(amount) / MINOR_UNITS_PER_MAJOR


def format_currency(amount: int | float | str | None) -> str:
    """Render an amount stored in cents as US-dollar display text.

    ``format_currency(123456)`` gives ``"$1,234.56"``; negatives keep the sign
    ahead of the symbol (``"-$5.00"``).
    """
    if amount is None:
        amount = 0
    major = (Decimal(str(amount)) / MINOR_UNITS_PER_MAJOR).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if major < 0 else ""
    return f"{sign}${abs(major):,.2f}"
