"""Input parsing helpers for the loan revolver.

Command-line arguments and web form fields arrive as text. These helpers turn
them into the integers and floats the engine expects and reject anything
malformed or out of range with :class:`~loan_revolver.errors.InvalidInput`
before a plan is computed. Values go through ``Decimal`` first so that
fractional currency amounts are detected exactly.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import InvalidInput

Number = Union[int, float, str, Decimal]

# Amounts stop at sixteen digits, beyond what a float holds exactly.
MAX_DIGITS = 16


def decimal_from_str(value: Number) -> Decimal:
    """Convert a numeric value or string into a ``Decimal``.

    Thousands separators and surrounding whitespace are stripped. Raises
    ``InvalidInput`` if conversion fails or the value is not finite.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid numeric value: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(str(value).strip().replace(",", "").replace("_", ""))
    except InvalidOperation:
        raise InvalidInput(f"Invalid numeric value: {value!r}") from None
    if not result.is_finite():
        raise InvalidInput(f"Invalid numeric value: {value!r}")
    return result


def parse_amount(value: Number, name: str = "amount", *, allow_zero: bool = True) -> int:
    """Parse a whole, non-negative currency amount.

    >>> parse_amount("1,000,000")
    1000000
    """
    dec = decimal_from_str(value)
    if dec.adjusted() >= MAX_DIGITS:
        raise InvalidInput(f"{name} is too large: {value!r}")
    if dec != dec.to_integral_value():
        raise InvalidInput(f"{name} must be a whole number: {value!r}")
    amount = int(dec)
    if amount < 0 or (amount == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise InvalidInput(f"{name} must be {bound}: {value!r}")
    return amount


def parse_rate(value: Number, name: str = "annual_rate") -> float:
    """Parse a non-negative annual percentage rate; a trailing ``%`` is allowed."""
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    rate = float(decimal_from_str(value))
    if rate < 0 or not math.isfinite(rate):
        raise InvalidInput(f"{name} must be non-negative: {value!r}")
    return rate


def parse_period_count(value: Number, name: str = "period_count") -> int:
    """Parse a positive number of periods."""
    return parse_amount(value, name, allow_zero=False)
