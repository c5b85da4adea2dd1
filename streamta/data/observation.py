"""
Capability protocols for indicator inputs.

An indicator asks only for the fields it reads. Any object exposing those
attributes qualifies, so a caller can feed its own bar type without
converting to Candle. Bare scalar prices are accepted wherever only a
close is needed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Tuple, runtime_checkable

from ..utils.helpers import THREE, is_scalar, to_decimal


@runtime_checkable
class HasOpen(Protocol):
    open: Any


@runtime_checkable
class HasHigh(Protocol):
    high: Any


@runtime_checkable
class HasLow(Protocol):
    low: Any


@runtime_checkable
class HasClose(Protocol):
    close: Any


@runtime_checkable
class HasVolume(Protocol):
    volume: Any


@runtime_checkable
class HasHighLowClose(Protocol):
    """Bar shape needed by True Range, ATR and Keltner Channel."""

    high: Any
    low: Any
    close: Any


@runtime_checkable
class HasCloseVolume(Protocol):
    """Bar shape needed by On Balance Volume."""

    close: Any
    volume: Any


_FIELDS = {
    "open": HasOpen,
    "high": HasHigh,
    "low": HasLow,
    "close": HasClose,
    "volume": HasVolume,
}


def _missing(item: object, missing: str, needs: str) -> TypeError:
    return TypeError(
        f"{type(item).__name__} does not provide {missing}\n"
        f"\n"
        f"Fix: pass a Candle or any object with attributes: {needs}"
    )


def fields_of(item: Any, *names: str) -> Tuple[Decimal, ...]:
    """
    Read the named price fields as decimals, checking each capability.

    Raises:
        TypeError: Naming every field the item lacks.
    """
    missing = [name for name in names if not isinstance(item, _FIELDS[name])]
    if missing:
        raise _missing(item, ", ".join(missing), ", ".join(names))
    return tuple(to_decimal(getattr(item, name)) for name in names)


def close_of(item: Any) -> Decimal:
    """Close price of a bar, or the scalar itself."""
    if is_scalar(item):
        return to_decimal(item)
    (close,) = fields_of(item, "close")
    return close


def high_low_close_of(item: Any) -> Tuple[Decimal, Decimal, Decimal]:
    return fields_of(item, "high", "low", "close")


def close_volume_of(item: Any) -> Tuple[Decimal, Decimal]:
    return fields_of(item, "close", "volume")


def typical_price_of(item: Any) -> Decimal:
    """(high + low + close) / 3"""
    high, low, close = high_low_close_of(item)
    return (high + low + close) / THREE
