"""
Decimal helpers shared by every indicator.

All indicator arithmetic runs on decimal.Decimal so long streams do not
accumulate binary floating-point drift.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterator, Union

Scalar = Union[Decimal, int, float, str]

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)
THREE = Decimal(3)
HUNDRED = Decimal(100)

SCALAR_TYPES = (Decimal, int, float, str)


def is_scalar(value: object) -> bool:
    """True for a bare price (Decimal, int, float or str), never for bool."""
    return isinstance(value, SCALAR_TYPES) and not isinstance(value, bool)


def to_decimal(value: Scalar) -> Decimal:
    """
    Convert a scalar price to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than
    its binary expansion.

    Raises:
        TypeError: If value is a bool or not a scalar.
        ValueError: If value is a string that is not a number.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, SCALAR_TYPES):
        raise TypeError(
            f"Expected Decimal, int, float or str, got {type(value).__name__}\n"
            f"\n"
            f"Fix: indicator.update(Decimal('101.25'))"
        )
    if isinstance(value, int):
        return Decimal(value)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(
            f"Not a number: {value!r}\n"
            f"\n"
            f"Fix: indicator.update('101.25')"
        ) from None


def max3(a: Decimal, b: Decimal, c: Decimal) -> Decimal:
    """Return the largest of 3 given numbers."""
    return max(a, b, c)


def min3(a: Decimal, b: Decimal, c: Decimal) -> Decimal:
    """Return the smallest of 3 given numbers."""
    return min(a, b, c)


def round_places(value: Decimal, places: int) -> Decimal:
    """Round half away from zero to a fixed number of decimal places."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


@contextmanager
def decimal_context(precision: int) -> Iterator[None]:
    """Run a block with a local decimal working precision."""
    with localcontext() as ctx:
        ctx.prec = precision
        yield
