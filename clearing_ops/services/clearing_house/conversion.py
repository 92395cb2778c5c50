# clearing_ops/services/clearing_house/conversion.py
"""
Fixed-point helpers for clearing-house parameters.

Every factor, ratio and amount the canister accepts is an integer scaled by
10**PRECISION_DECIMALS. Two conversions are kept on purpose:

* ``to_precision``   – float multiply then truncate; carries binary rounding
  error for fractions like 0.1. Used for dimensionless factors.
* ``to_parse_units`` – exact decimal parse of ``str(value)``; no binary error
  for values that are exact in base 10. Used for currency-like amounts.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Union

PRECISION_DECIMALS = 20
PRECISION = 10 ** PRECISION_DECIMALS

Number = Union[int, float, Decimal, str]


def to_precision(value: Number) -> int:
    """Scale *value* by 10**20 with float arithmetic, truncating toward zero."""
    f = float(value)
    if not math.isfinite(f):
        raise ValueError(f"cannot scale non-finite value {value!r}")
    return int(f * PRECISION)


def to_parse_units(value: Number, decimals: int = PRECISION_DECIMALS) -> int:
    """
    Parse ``str(value)`` as a decimal with *decimals* fractional digits.

    Raises ValueError if the value is not a finite decimal or needs more
    fractional digits than *decimals*.
    """
    text = str(value).strip()
    try:
        parsed = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"invalid decimal value {value!r}") from e
    if not parsed.is_finite():
        raise ValueError(f"cannot scale non-finite value {value!r}")

    sign, digits, exponent = parsed.as_tuple()
    if exponent < -decimals:
        # trailing zeros beyond the scale are harmless
        surplus = -decimals - exponent
        if any(digits[-surplus:]):
            raise ValueError(f"fractional component of {value!r} exceeds {decimals} decimals")
        digits = digits[:-surplus] or (0,)
        exponent = -decimals

    coefficient = int("".join(str(d) for d in digits))
    scaled = coefficient * 10 ** (exponent + decimals)
    return -scaled if sign else scaled


def from_precision(value: int) -> Decimal:
    """Exact decimal view of a fixed-point integer, for display."""
    sign, digits, exponent = Decimal(int(value)).as_tuple()
    return Decimal((sign, digits, exponent - PRECISION_DECIMALS))


__all__ = ["PRECISION_DECIMALS", "PRECISION", "to_precision", "to_parse_units", "from_precision"]
