"""
EMA-composable indicators built on top of IncrementalEMA.

Percentage Price Oscillator: MACD normalized by the slow EMA.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple

from ...config.constants import (
    DEFAULT_FAST_PERIOD,
    DEFAULT_SIGNAL_PERIOD,
    DEFAULT_SLOW_PERIOD,
)
from ...data.observation import close_of
from ...utils.helpers import HUNDRED
from .base import IncrementalIndicator, validate_period
from .core import IncrementalEMA


class PPOOutput(NamedTuple):
    ppo: Decimal
    signal: Decimal
    histogram: Decimal


@dataclass
class IncrementalPPO(IncrementalIndicator):
    """
    Percentage Price Oscillator with O(1) updates.

    Formula:
        ppo = (ema_fast - ema_slow) / ema_slow * 100
        signal = ema(ppo, signal)
        histogram = ppo - signal

    A zero slow EMA is not special-cased; the decimal division error
    propagates.
    """

    fast: int = DEFAULT_FAST_PERIOD
    slow: int = DEFAULT_SLOW_PERIOD
    signal: int = DEFAULT_SIGNAL_PERIOD
    _ema_fast: IncrementalEMA = field(init=False, repr=False)
    _ema_slow: IncrementalEMA = field(init=False, repr=False)
    _ema_signal: IncrementalEMA = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.fast = validate_period("fast", self.fast)
        self.slow = validate_period("slow", self.slow)
        self.signal = validate_period("signal", self.signal)
        self._ema_fast = IncrementalEMA(period=self.fast)
        self._ema_slow = IncrementalEMA(period=self.slow)
        self._ema_signal = IncrementalEMA(period=self.signal)

    def update(self, item: Any) -> PPOOutput:
        """Update with new close price."""
        value = close_of(item)
        fast_val = self._ema_fast.update(value)
        slow_val = self._ema_slow.update(value)
        ppo = (fast_val - slow_val) / slow_val * HUNDRED
        signal_line = self._ema_signal.update(ppo)
        return PPOOutput(ppo, signal_line, ppo - signal_line)

    def reset(self) -> None:
        self._ema_fast.reset()
        self._ema_slow.reset()
        self._ema_signal.reset()

    def __str__(self) -> str:
        return f"PPO({self.fast}, {self.slow}, {self.signal})"
