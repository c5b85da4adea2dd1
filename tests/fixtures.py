"""
Test fixtures - bar builders and rounding helpers.

Bar defaults every field to zero so a test sets only what an indicator
reads, e.g. Bar(close=lit("1.5"), volume=1000).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import numpy as np

from streamta.utils.helpers import round_places, to_decimal


def lit(value) -> Decimal:
    """Exact decimal literal: lit("10.57"), lit(3)."""
    return to_decimal(value)


def rnd(value: Decimal, places: int = 3) -> Decimal:
    """Round half away from zero (3 places unless stated)."""
    return round_places(value, places)


def rnd_all(values, places: int = 2) -> tuple:
    return tuple(round_places(v, places) for v in values)


@dataclass
class Bar:
    """Minimal OHLCV input satisfying every capability protocol."""
    open: Decimal = Decimal(0)
    high: Decimal = Decimal(0)
    low: Decimal = Decimal(0)
    close: Decimal = Decimal(0)
    volume: Decimal = Decimal(0)

    def __post_init__(self):
        for name in ("open", "high", "low", "close", "volume"):
            setattr(self, name, to_decimal(getattr(self, name)))


def hlc(high, low, close) -> Bar:
    return Bar(high=high, low=low, close=close)


def random_walk_prices(n: int = 500, seed: int = 42, start: float = 100.0) -> list[Decimal]:
    """Deterministic positive price path with 2-decimal ticks."""
    rng = np.random.RandomState(seed)
    steps = rng.normal(0.0, 1.0, n)
    path = np.maximum(start + np.cumsum(steps), 1.0)
    return [Decimal(f"{p:.2f}") for p in path]


def random_walk_bars(n: int = 200, seed: int = 7) -> list[Bar]:
    """Deterministic OHLCV bars with low <= open, close <= high."""
    rng = np.random.RandomState(seed)
    closes = random_walk_prices(n, seed)
    bars = []
    prev = closes[0]
    for close in closes:
        open_ = prev
        spread = Decimal(f"{abs(rng.normal(0.0, 0.5)):.2f}")
        high = max(open_, close) + spread
        low = min(open_, close) - spread
        volume = Decimal(int(rng.randint(100, 10_000)))
        bars.append(Bar(open=open_, high=high, low=low, close=close, volume=volume))
        prev = close
    return bars
