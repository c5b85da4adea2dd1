"""
Channel indicators that look back through smoothed ranges.

Keltner Channel: EMA of typical price banded by a multiple of ATR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple

from ...config.constants import DEFAULT_KC_MULTIPLIER, DEFAULT_KC_PERIOD
from ...data.observation import typical_price_of
from ...utils.helpers import is_scalar, to_decimal
from .base import IncrementalIndicator, validate_multiplier, validate_period
from .core import IncrementalATR, IncrementalEMA


class KeltnerChannelOutput(NamedTuple):
    average: Decimal
    upper: Decimal
    lower: Decimal


@dataclass
class IncrementalKC(IncrementalIndicator):
    """
    Keltner Channel with O(1) updates.

    Formula:
        basis = ema(typical_price, period)   # (high + low + close) / 3
        band = atr(period)                   # EMA of true range
        upper = basis + multiplier * band
        lower = basis - multiplier * band

    Scalar input feeds the price to both the EMA and the ATR, whose true
    range then degenerates to |price - prev_price|.
    """

    period: int = DEFAULT_KC_PERIOD
    multiplier: Decimal = DEFAULT_KC_MULTIPLIER
    _ema: IncrementalEMA = field(init=False, repr=False)
    _atr: IncrementalATR = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._ema = IncrementalEMA(period=self.period)
        self._atr = IncrementalATR(period=self.period)
        self.multiplier = validate_multiplier("multiplier", self.multiplier)

    def update(self, item: Any) -> KeltnerChannelOutput:
        """Update with a bar (high/low/close) or a bare price."""
        if is_scalar(item):
            value = to_decimal(item)
            average = self._ema.update(value)
            atr = self._atr.update(value)
        else:
            average = self._ema.update(typical_price_of(item))
            atr = self._atr.update(item)

        return KeltnerChannelOutput(
            average=average,
            upper=average + atr * self.multiplier,
            lower=average - atr * self.multiplier,
        )

    def reset(self) -> None:
        self._ema.reset()
        self._atr.reset()

    def __str__(self) -> str:
        return f"KC({self.period}, {self.multiplier})"
