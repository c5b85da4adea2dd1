"""
Buffer-walking indicators.

Efficiency Ratio needs the path length across the whole window, so each
update walks the ring buffer once: O(period) per call, bounded by the
fixed period.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ...config.constants import DEFAULT_ER_PERIOD
from ...data.observation import close_of
from ...structures.primitives import RingBuffer
from ...utils.helpers import ONE, ZERO
from .base import IncrementalIndicator, validate_period


@dataclass
class IncrementalER(IncrementalIndicator):
    """
    Kaufman Efficiency Ratio.

    Formula:
        direction = |close - first|
        volatility = sum(|p[i] - p[i-1]|) from first through close
        er = direction / volatility      (1 when volatility == 0)

    first is the value the update evicts once the window is full. While
    filling it is the first value ever pushed, or the zero fill on the very
    first call.
    """

    period: int = DEFAULT_ER_PERIOD
    _buffer: RingBuffer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._buffer = RingBuffer(size=self.period)

    def update(self, item: Any) -> Decimal:
        """Update with new close price."""
        value = close_of(item)
        first = self._buffer.oldest
        self._buffer.push(value)

        volatility = ZERO
        previous = first
        for n in self._buffer:
            volatility += abs(previous - n)
            previous = n

        if volatility == ZERO:
            return ONE
        return abs(first - value) / volatility

    def reset(self) -> None:
        self._buffer.clear()

    def __str__(self) -> str:
        return f"ER({self.period})"
