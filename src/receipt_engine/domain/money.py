# src/receipt_engine/domain/money.py
"""
Money Model - Fixed-point Monetary Arithmetic

Monetary amounts are decimal.Decimal values. Intermediate products
(quantity x price, percentages, currency conversion) keep full Decimal
precision; values are rounded half-up to 2 fractional digits only when a
Totals field or a display string is produced.

Files that USE this module:
- receipt_engine.domain.models (amount conversion in value objects)
- receipt_engine.application.* (totals, coupons, currency conversion)
- receipt_engine.adapters.formatting.formatter (display strings)

Files that this module USES:
- receipt_engine.domain.errors (InvalidAmountError)
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP  # Precise decimal arithmetic for money
from typing import Union

from receipt_engine.domain.errors import InvalidAmountError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Commas are accepted only as thousands separators, in western (1,234,567) or
# Indian (12,34,567) grouping.
_GROUPED = re.compile(r"^[+-]?(\d{1,3}(,\d{3})+|\d{1,2}(,\d{2})*,\d{3})(\.\d+)?$")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a caller-supplied number to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion. Strings may group digits with commas; a decimal comma
    such as "3,50" is rejected.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Finite Decimal value

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Not a number: {value!r}")
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            text = str(value).strip()
            if "," in text:
                if not _GROUPED.match(text):
                    raise InvalidAmountError(f"Misplaced comma in amount: {value!r}")
                text = text.replace(",", "")
            result = Decimal(text)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidAmountError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise InvalidAmountError(f"Not a finite number: {value!r}")
    return result


def to_money(value: Number) -> Decimal:
    """
    Convert a caller-supplied amount to Decimal, rejecting negatives.

    Zero is allowed.

    Raises:
        InvalidAmountError: If the value is negative or not a number
    """
    amount = to_decimal(value)
    if amount < 0:
        raise InvalidAmountError(f"Amount must not be negative: {value!r}")
    return amount


def round2(value: Number) -> Decimal:
    """Round to 2 fractional digits, half-up (receipt/POS convention)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Number, symbol: str = "") -> str:
    """
    Format an amount for display.

    Args:
        value: Amount to format
        symbol: Currency symbol prefix (e.g. "₹", "$")

    Returns:
        Symbol followed by the amount with exactly 2 fractional digits
    """
    return f"{symbol}{round2(value):.2f}"


def _compact(value: Decimal) -> str:
    # normalize() yields exponents for round numbers (1E+2), 'f' undoes that
    return format(value.normalize(), "f")


def format_quantity(value: Number) -> str:
    """Format a quantity without trailing zeros: 2, 0.5, 1.25."""
    return _compact(to_decimal(value))


def format_percent(value: Number) -> str:
    """Format a percentage rate without trailing zeros: 18, 7.5."""
    return _compact(to_decimal(value))
