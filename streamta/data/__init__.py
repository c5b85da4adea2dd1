"""
Indicator inputs: capability protocols and the Candle value object.
"""

from .candle import Candle, CandleBuilder
from .observation import (
    HasOpen,
    HasHigh,
    HasLow,
    HasClose,
    HasVolume,
    HasHighLowClose,
    HasCloseVolume,
    close_of,
    fields_of,
    high_low_close_of,
    close_volume_of,
    typical_price_of,
)

__all__ = [
    "Candle",
    "CandleBuilder",
    "HasOpen",
    "HasHigh",
    "HasLow",
    "HasClose",
    "HasVolume",
    "HasHighLowClose",
    "HasCloseVolume",
    "close_of",
    "fields_of",
    "high_low_close_of",
    "close_volume_of",
    "typical_price_of",
]
