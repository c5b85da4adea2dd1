"""
Trivial indicators with minimal state.

Rate of Change (lag difference over a ring buffer) and On Balance Volume
(running signed-volume total).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ...config.constants import DEFAULT_ROC_PERIOD
from ...data.observation import close_of, close_volume_of
from ...structures.primitives import RingBuffer
from ...utils.helpers import HUNDRED, ZERO
from .base import IncrementalIndicator, validate_period


@dataclass
class IncrementalROC(IncrementalIndicator):
    """
    Rate of Change with O(1) updates using ring buffer.

    Formula:
        roc = ((close - close[period]) / close[period]) * 100

    Until the window has filled once, close[period] is the very first value
    ever seen rather than a zero-filled slot, so the first result is 0 and
    early results measure change since the start of the stream.

    A zero reference price is not special-cased: the decimal division error
    propagates to the caller.
    """

    period: int = DEFAULT_ROC_PERIOD
    _buffer: RingBuffer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._buffer = RingBuffer(size=self.period)

    def update(self, item: Any) -> Decimal:
        """Update with new close price."""
        value = close_of(item)
        # oldest is physical slot 0 (the first value) until the buffer fills
        previous = value if len(self._buffer) == 0 else self._buffer.oldest
        self._buffer.push(value)
        return (value - previous) / previous * HUNDRED

    def reset(self) -> None:
        self._buffer.clear()

    def __str__(self) -> str:
        return f"ROC({self.period})"


@dataclass
class IncrementalOBV(IncrementalIndicator):
    """
    On Balance Volume with O(1) updates.

    Formula:
        obv += volume   if close > prev_close
        obv -= volume   if close < prev_close
        (unchanged when equal)

    prev_close starts at zero, so a first bar with a positive close adds its
    volume.
    """

    _obv: Decimal = field(default=ZERO, init=False)
    _prev_close: Decimal = field(default=ZERO, init=False)

    def update(self, item: Any) -> Decimal:
        """Update with new close and volume."""
        close, volume = close_volume_of(item)

        if close > self._prev_close:
            self._obv += volume
        elif close < self._prev_close:
            self._obv -= volume

        self._prev_close = close
        return self._obv

    def reset(self) -> None:
        self._obv = ZERO
        self._prev_close = ZERO

    def __str__(self) -> str:
        return "OBV"
