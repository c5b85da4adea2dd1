"""
Default parameters for every indicator.

Constructing an indicator with no arguments uses these values.
"""

from decimal import Decimal


# ==================== Window / Smoothing Periods ====================

DEFAULT_SMA_PERIOD = 9
DEFAULT_EMA_PERIOD = 9
DEFAULT_SD_PERIOD = 9
DEFAULT_ROC_PERIOD = 9
DEFAULT_ER_PERIOD = 14
DEFAULT_ATR_PERIOD = 14

# Bollinger Bands
DEFAULT_BB_PERIOD = 9
DEFAULT_BB_MULTIPLIER = Decimal("2.0")

# Keltner Channel
DEFAULT_KC_PERIOD = 10
DEFAULT_KC_MULTIPLIER = Decimal("2")

# MACD / PPO share the classic 12/26/9 setup
DEFAULT_FAST_PERIOD = 12
DEFAULT_SLOW_PERIOD = 26
DEFAULT_SIGNAL_PERIOD = 9


# ==================== Numeric ====================

# Matches the default decimal context precision
DEFAULT_DECIMAL_PRECISION = 28
MIN_DECIMAL_PRECISION = 8
DEFAULT_DISPLAY_PLACES = 4
