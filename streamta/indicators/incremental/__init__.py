"""
Incremental indicator computation for streaming data.

O(1) per-observation updates (O(period) for Efficiency Ratio) with exact
decimal arithmetic and bounded memory.

Usage:
    from streamta.indicators.incremental import IncrementalEMA, IncrementalBBands

    ema = IncrementalEMA(period=9)
    for price in closes:
        value = ema.update(price)

    bb = IncrementalBBands(period=20, multiplier="2")
    out = bb.update(candle)
    out.average, out.upper, out.lower
"""

from __future__ import annotations

# Base class
from .base import IncrementalIndicator, validate_multiplier, validate_period

# Core indicators
from .core import (
    IncrementalEMA,
    IncrementalSMA,
    IncrementalSD,
    IncrementalTrueRange,
    IncrementalATR,
    IncrementalMACD,
    IncrementalBBands,
    MACDOutput,
    BollingerBandsOutput,
)

# Trivial indicators
from .trivial import (
    IncrementalROC,
    IncrementalOBV,
)

# Buffer-walking indicators
from .buffer_based import IncrementalER

# EMA-composable indicators
from .ema_composable import IncrementalPPO, PPOOutput

# Channel indicators
from .lookback import IncrementalKC, KeltnerChannelOutput

# Factory and utilities
from .factory import (
    create_incremental_indicator,
    parse_indicator_spec,
    list_incremental_indicators,
)

__all__ = [
    # Base
    "IncrementalIndicator",
    "validate_period",
    "validate_multiplier",
    # Core
    "IncrementalEMA",
    "IncrementalSMA",
    "IncrementalSD",
    "IncrementalTrueRange",
    "IncrementalATR",
    "IncrementalMACD",
    "IncrementalBBands",
    "MACDOutput",
    "BollingerBandsOutput",
    # Trivial
    "IncrementalROC",
    "IncrementalOBV",
    # Buffer-walking
    "IncrementalER",
    # EMA-composable
    "IncrementalPPO",
    "PPOOutput",
    # Channels
    "IncrementalKC",
    "KeltnerChannelOutput",
    # Factory and utilities
    "create_incremental_indicator",
    "parse_indicator_spec",
    "list_incremental_indicators",
]
