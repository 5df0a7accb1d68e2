"""
utils/money.py
--------------
Decimal helpers for every monetary value in the ledger.

Amounts are rounded to cents as soon as they are produced, half away
from zero, so intermediate figures match what is shown to the user.
"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from errors import InvalidInput

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
_CENT = Decimal("0.01")


def to_decimal(value, field: str = "value") -> Decimal:
    """
    Convert a user or database value to Decimal.

    Floats go through ``str()`` so 0.1 stays 0.1 instead of its binary
    expansion.

    Raises:
        InvalidInput: for None, booleans, NaN, infinities and anything
            that does not parse as a number.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise InvalidInput(f"{field} must be a finite number, got {value!r}")
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", "."))
        except InvalidOperation:
            raise InvalidInput(f"{field} must be a number, got {value!r}") from None
    else:
        raise InvalidInput(f"{field} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInput(f"{field} must be a finite number, got {value!r}")
    return result


def round2(value) -> Decimal:
    """Round to two decimals, half away from zero (174.669 -> 174.67, -0.005 -> -0.01)."""
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    """``amount × rate / 100`` rounded to cents."""
    return round2(amount * rate / HUNDRED)


def money_sum(values) -> Decimal:
    """Sum an iterable of amounts and round the result."""
    return round2(sum((to_decimal(v) for v in values), ZERO))


def format_eur(amount, symbol: str = "€") -> str:
    """Italian formatting: 1234.5 -> '1.234,50 €'."""
    text = f"{to_decimal(amount):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{text} {symbol}"
