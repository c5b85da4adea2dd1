"""
streamta: incrementally-updated technical indicators on exact decimals.

Every indicator consumes one observation per update() call and returns the
new value in constant time and bounded memory.
"""

from .errors import (
    TaError,
    InvalidParameter,
    DataItemIncomplete,
    DataItemInvalid,
    UnknownIndicatorError,
)
from .data import Candle, CandleBuilder
from .indicators.incremental import (
    IncrementalIndicator,
    IncrementalEMA,
    IncrementalSMA,
    IncrementalSD,
    IncrementalTrueRange,
    IncrementalATR,
    IncrementalMACD,
    IncrementalBBands,
    IncrementalROC,
    IncrementalOBV,
    IncrementalER,
    IncrementalPPO,
    IncrementalKC,
    create_incremental_indicator,
)

__version__ = "0.5.0"

__all__ = [
    "TaError",
    "InvalidParameter",
    "DataItemIncomplete",
    "DataItemInvalid",
    "UnknownIndicatorError",
    "Candle",
    "CandleBuilder",
    "IncrementalIndicator",
    "IncrementalEMA",
    "IncrementalSMA",
    "IncrementalSD",
    "IncrementalTrueRange",
    "IncrementalATR",
    "IncrementalMACD",
    "IncrementalBBands",
    "IncrementalROC",
    "IncrementalOBV",
    "IncrementalER",
    "IncrementalPPO",
    "IncrementalKC",
    "create_incremental_indicator",
]
