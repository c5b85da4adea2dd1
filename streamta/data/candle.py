"""
Immutable OHLCV bar and its validating builder.

The builder is the only place DataItemIncomplete / DataItemInvalid are
raised; indicators trust whatever bar they are handed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..errors import DataItemIncomplete, DataItemInvalid
from ..utils.helpers import ZERO, Scalar, max3, min3, to_decimal


@dataclass(frozen=True)
class Candle:
    """
    One OHLCV observation.

    Satisfies every capability protocol in streamta.data.observation.

    Example:
        >>> item = (Candle.builder()
        ...     .open(20).high(25).low(15).close(21).volume(7500)
        ...     .build())
        >>> item.close
        Decimal('21')
    """

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    time: Optional[datetime] = None

    @staticmethod
    def builder() -> "CandleBuilder":
        return CandleBuilder()


class CandleBuilder:
    """Fluent builder; every setter returns the builder."""

    _REQUIRED = ("open", "high", "low", "close", "volume")

    def __init__(self) -> None:
        self._time: Optional[datetime] = None
        self._open: Optional[Decimal] = None
        self._high: Optional[Decimal] = None
        self._low: Optional[Decimal] = None
        self._close: Optional[Decimal] = None
        self._volume: Optional[Decimal] = None

    def time(self, value: datetime) -> "CandleBuilder":
        self._time = value
        return self

    def open(self, value: Scalar) -> "CandleBuilder":
        self._open = to_decimal(value)
        return self

    def high(self, value: Scalar) -> "CandleBuilder":
        self._high = to_decimal(value)
        return self

    def low(self, value: Scalar) -> "CandleBuilder":
        self._low = to_decimal(value)
        return self

    def close(self, value: Scalar) -> "CandleBuilder":
        self._close = to_decimal(value)
        return self

    def volume(self, value: Scalar) -> "CandleBuilder":
        self._volume = to_decimal(value)
        return self

    def build(self) -> Candle:
        """
        Validate and freeze the bar.

        Raises:
            DataItemIncomplete: If open, high, low, close or volume is unset.
            DataItemInvalid: If low/high do not bound the other prices, or
                volume is negative.
        """
        missing = [name for name in self._REQUIRED if getattr(self, f"_{name}") is None]
        if missing:
            raise DataItemIncomplete(
                f"Candle is missing fields: {', '.join(missing)}\n"
                f"\n"
                f"Fix: Candle.builder().open(o).high(h).low(l).close(c).volume(v).build()"
            )

        open_, high, low = self._open, self._high, self._low
        close, volume = self._close, self._volume
        if low > min3(open_, close, high) or high < max3(open_, close, low) or volume < ZERO:
            raise DataItemInvalid(
                f"Inconsistent candle: open={open_} high={high} low={low} "
                f"close={close} volume={volume}\n"
                f"\n"
                f"Fix: low <= open, close <= high and volume >= 0"
            )

        return Candle(
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume,
            time=self._time,
        )
