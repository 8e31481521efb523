"""Exact rational helpers for frame and seconds calculations."""

from __future__ import annotations

import enum
import math
import sys
from decimal import Decimal
from fractions import Fraction
from typing import NewType

if sys.version_info >= (3, 11):
    _rate_type = Fraction | str | float | int | tuple[int, int]
    _rational_type = Fraction | Decimal | float | int
else:
    from typing import Union
    _rate_type = Union[Fraction, str, float, int, tuple[int, int]]
    _rational_type = Union[Fraction, Decimal, float, int]

_RateSource = NewType("_RateSource", _rate_type)
_Rational = NewType("_Rational", _rational_type)


#%%
class Round(str, enum.Enum):
    """Rounding modes used when a value has to land on a whole frame.

    ``CLOSEST`` rounds halves away from zero. ``OFF`` keeps the exact value
    and is rejected by operations that must return an integer.
    """

    CLOSEST = "closest"
    FLOOR = "floor"
    CEIL = "ceil"
    TRUNC = "trunc"
    OFF = "off"
####


def round_rational(value: _Rational, mode: Round | str = Round.CLOSEST) -> int | Fraction:
    """Round an exact value to an integer using the given mode.

    Args:
        value (Fraction | Decimal | float | int): The value to round.
        mode (Round | str): One of the :class:`Round` modes.

    Returns:
        int | Fraction: The rounded integer, or the exact value untouched when
            ``mode`` is ``Round.OFF``.
    """
    mode = Round(mode)
    value = to_fraction(value)

    if mode is Round.OFF:
        return value
    if mode is Round.FLOOR:
        return math.floor(value)
    if mode is Round.CEIL:
        return math.ceil(value)
    if mode is Round.TRUNC:
        return math.trunc(value)

    floor = math.floor(value)
    remainder = value - floor
    if remainder > Fraction(1, 2):
        return floor + 1
    if remainder < Fraction(1, 2):
        return floor
    return floor + 1 if value > 0 else floor


def divrem(dividend: _Rational, divisor: _Rational) -> tuple[int, Fraction]:
    """Truncating division.

    Unlike the builtin :func:`divmod`, the quotient is rounded toward zero and
    the remainder carries the sign of the dividend.

    Returns:
        tuple: The integer quotient and the exact remainder.
    """
    dividend = to_fraction(dividend)
    divisor = to_fraction(divisor)
    quotient = math.trunc(dividend / divisor)
    return quotient, dividend - quotient * divisor


def to_fraction(value: _Rational) -> Fraction:
    """Convert a number to an exact Fraction.

    Floats go through their shortest decimal representation, so ``3603.6``
    becomes ``18018/5`` and not the binary approximation.

    Raises:
        TypeError: If the value is not a number.
        ValueError: If the value is NaN or infinite.
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not valid rational values")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{value} cannot be represented as a rational")
        return Fraction(repr(value))
    if isinstance(value, Decimal):
        return Fraction(value)
    raise TypeError(
        f"Type {value.__class__.__name__} cannot be converted to a rational."
    )


def ensure_round_enabled(mode: Round | str, name: str = "round") -> Round:
    """Reject ``Round.OFF`` for operations that must produce an integer."""
    mode = Round(mode)
    if mode is Round.OFF:
        raise ValueError(f"`{name}` cannot be `off`")
    return mode
