"""
Core incremental indicators.

Includes EMA, SMA, Standard Deviation, True Range, ATR, MACD and
Bollinger Bands. Everything else in this package composes these.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, NamedTuple, Optional

from ...config.constants import (
    DEFAULT_ATR_PERIOD,
    DEFAULT_BB_MULTIPLIER,
    DEFAULT_BB_PERIOD,
    DEFAULT_EMA_PERIOD,
    DEFAULT_FAST_PERIOD,
    DEFAULT_SD_PERIOD,
    DEFAULT_SIGNAL_PERIOD,
    DEFAULT_SLOW_PERIOD,
    DEFAULT_SMA_PERIOD,
)
from ...data.observation import close_of, high_low_close_of
from ...structures.primitives import RingBuffer
from ...utils.helpers import ONE, TWO, ZERO, is_scalar, max3, to_decimal
from .base import IncrementalIndicator, validate_multiplier, validate_period


@dataclass
class IncrementalEMA(IncrementalIndicator):
    """
    Exponential Moving Average with O(1) updates.

    Formula:
        k = 2 / (period + 1)
        ema = k * close + (1 - k) * ema_prev

    The first value seeds the average as-is, so there is no cold-start
    bias toward zero.
    """

    period: int = DEFAULT_EMA_PERIOD
    _k: Decimal = field(init=False, repr=False)
    _current: Decimal = field(default=ZERO, init=False)
    _is_new: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._k = TWO / Decimal(self.period + 1)

    def update(self, item: Any) -> Decimal:
        """Update with new close price."""
        value = close_of(item)
        if self._is_new:
            self._is_new = False
            self._current = value
        else:
            self._current = self._k * value + (ONE - self._k) * self._current
        return self._current

    def reset(self) -> None:
        self._current = ZERO
        self._is_new = True

    def __str__(self) -> str:
        return f"EMA({self.period})"


@dataclass
class IncrementalSMA(IncrementalIndicator):
    """
    Simple Moving Average with O(1) updates using ring buffer.

    Uses running sum technique:
        sum = sum + new - evicted
        sma = sum / min(count, period)

    Before the window first fills the divisor is the number of values seen.
    """

    period: int = DEFAULT_SMA_PERIOD
    _buffer: RingBuffer = field(init=False, repr=False)
    _sum: Decimal = field(default=ZERO, init=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._buffer = RingBuffer(size=self.period)

    def update(self, item: Any) -> Decimal:
        """Update with new close price."""
        value = close_of(item)
        evicted = self._buffer.push(value)
        self._sum = self._sum - evicted + value
        return self._sum / len(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._sum = ZERO

    def __str__(self) -> str:
        return f"SMA({self.period})"


@dataclass
class IncrementalSD(IncrementalIndicator):
    """
    Population Standard Deviation with O(1) updates (Welford).

    Filling phase (n < period), classic Welford against a growing count:
        n += 1
        delta = x - mean
        mean += delta / n
        m2 += delta * (x - mean)

    Full phase, x replaces the evicted value old:
        delta = x - old
        mean_prev = mean
        mean += delta / period
        m2 += delta * (x - mean + old - mean_prev)

    sd = sqrt(m2 / n). m2 is clamped at zero so decimal round-off can never
    produce a negative radicand.
    """

    period: int = DEFAULT_SD_PERIOD
    _buffer: RingBuffer = field(init=False, repr=False)
    _mean: Decimal = field(default=ZERO, init=False)
    _m2: Decimal = field(default=ZERO, init=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._buffer = RingBuffer(size=self.period)

    def update(self, item: Any) -> Decimal:
        """Update with new close price."""
        value = close_of(item)
        filling = not self._buffer.is_full()
        old = self._buffer.push(value)

        if filling:
            delta = value - self._mean
            self._mean += delta / len(self._buffer)
            self._m2 += delta * (value - self._mean)
        else:
            delta = value - old
            old_mean = self._mean
            self._mean += delta / self.period
            self._m2 += delta * (value - self._mean + old - old_mean)

        if self._m2 < ZERO:
            self._m2 = ZERO

        return (self._m2 / len(self._buffer)).sqrt()

    def reset(self) -> None:
        self._buffer.clear()
        self._mean = ZERO
        self._m2 = ZERO

    @property
    def mean(self) -> Decimal:
        """Window mean as of the last update() (not recomputed)."""
        return self._mean

    def __str__(self) -> str:
        return f"SD({self.period})"


@dataclass
class IncrementalTrueRange(IncrementalIndicator):
    """
    True Range with O(1) updates.

    Bar input:
        tr = max(high - low, |high - prev_close|, |low - prev_close|)
        first bar: tr = high - low

    Scalar input (a single price stream):
        tr = |price - prev_price|, 0 on the first call
    """

    _prev_close: Optional[Decimal] = field(default=None, init=False)

    def update(self, item: Any) -> Decimal:
        """Update with a bar (high/low/close) or a bare price."""
        if is_scalar(item):
            value = to_decimal(item)
            distance = ZERO if self._prev_close is None else abs(value - self._prev_close)
            self._prev_close = value
            return distance

        high, low, close = high_low_close_of(item)
        if self._prev_close is None:
            tr = high - low
        else:
            tr = max3(
                high - low,
                abs(high - self._prev_close),
                abs(low - self._prev_close),
            )
        self._prev_close = close
        return tr

    def reset(self) -> None:
        self._prev_close = None

    def __str__(self) -> str:
        return "TRUE_RANGE()"


@dataclass
class IncrementalATR(IncrementalIndicator):
    """
    Average True Range with O(1) updates.

    Formula:
        atr = ema(true_range, period)

    Accepts the same inputs as IncrementalTrueRange. period is the EMA's.
    """

    period: int = DEFAULT_ATR_PERIOD
    _true_range: IncrementalTrueRange = field(init=False, repr=False)
    _ema: IncrementalEMA = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._true_range = IncrementalTrueRange()
        self._ema = IncrementalEMA(period=self.period)

    def update(self, item: Any) -> Decimal:
        """Update with a bar (high/low/close) or a bare price."""
        return self._ema.update(self._true_range.update(item))

    def reset(self) -> None:
        self._true_range.reset()
        self._ema.reset()

    def __str__(self) -> str:
        return f"ATR({self.period})"


class MACDOutput(NamedTuple):
    macd: Decimal
    signal: Decimal
    histogram: Decimal


@dataclass
class IncrementalMACD(IncrementalIndicator):
    """
    MACD with O(1) updates using incremental EMAs.

    Components:
        macd_line = ema_fast - ema_slow
        signal = ema(macd_line, signal)
        histogram = macd_line - signal
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

    def update(self, item: Any) -> MACDOutput:
        """Update with new close price."""
        value = close_of(item)
        macd_line = self._ema_fast.update(value) - self._ema_slow.update(value)
        signal_line = self._ema_signal.update(macd_line)
        return MACDOutput(macd_line, signal_line, macd_line - signal_line)

    def reset(self) -> None:
        self._ema_fast.reset()
        self._ema_slow.reset()
        self._ema_signal.reset()

    def __str__(self) -> str:
        return f"MACD({self.fast}, {self.slow}, {self.signal})"


class BollingerBandsOutput(NamedTuple):
    average: Decimal
    upper: Decimal
    lower: Decimal


@dataclass
class IncrementalBBands(IncrementalIndicator):
    """
    Bollinger Bands with O(1) updates.

    Reads the mean the owned IncrementalSD already maintains instead of
    running a separate SMA:
        sd = stddev(close, period)       # population, ddof=0
        middle = sd.mean
        upper = middle + multiplier * sd
        lower = middle - multiplier * sd
    """

    period: int = DEFAULT_BB_PERIOD
    multiplier: Decimal = DEFAULT_BB_MULTIPLIER
    _sd: IncrementalSD = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.period = validate_period("period", self.period)
        self._sd = IncrementalSD(period=self.period)
        self.multiplier = validate_multiplier("multiplier", self.multiplier)

    def update(self, item: Any) -> BollingerBandsOutput:
        """Update with new close price."""
        sd = self._sd.update(item)
        mean = self._sd.mean
        return BollingerBandsOutput(
            average=mean,
            upper=mean + sd * self.multiplier,
            lower=mean - sd * self.multiplier,
        )

    def reset(self) -> None:
        self._sd.reset()

    def __str__(self) -> str:
        return f"BB({self.period}, {self.multiplier})"
