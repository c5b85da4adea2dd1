"""
Factory function and registry for incremental indicators.

Provides create_incremental_indicator() to instantiate any incremental
indicator from a type string and parameter dict, plus parse_indicator_spec()
for compact "type:arg,arg" strings used on the command line.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ...config import constants as c
from ...errors import UnknownIndicatorError
from ...utils.logger import get_logger
from .base import IncrementalIndicator
from .buffer_based import IncrementalER
from .core import (
    IncrementalATR,
    IncrementalBBands,
    IncrementalEMA,
    IncrementalMACD,
    IncrementalSD,
    IncrementalSMA,
    IncrementalTrueRange,
)
from .ema_composable import IncrementalPPO
from .lookback import IncrementalKC
from .trivial import IncrementalOBV, IncrementalROC


# =============================================================================
# Parameter registry
# =============================================================================

# Ordered: positional args in "type:a,b,c" specs map onto these names.
_PARAMS: dict[str, tuple[str, ...]] = {
    "sma": ("period",),
    "ema": ("period",),
    "sd": ("period",),
    "roc": ("period",),
    "er": ("period",),
    "tr": (),
    "atr": ("period",),
    "obv": (),
    "bb": ("period", "multiplier"),
    "kc": ("period", "multiplier"),
    "macd": ("fast", "slow", "signal"),
    "ppo": ("fast", "slow", "signal"),
}


def _validate_params(indicator_type: str, params: dict[str, Any]) -> None:
    """Raise ValueError if params contains unknown keys for this indicator."""
    valid = _PARAMS[indicator_type]
    unknown = set(params.keys()) - set(valid)
    if unknown:
        raise ValueError(
            f"Unknown params for '{indicator_type}': {sorted(unknown)}. "
            f"Valid: {sorted(valid)}"
        )


# Each entry maps indicator type string to a callable(params) -> IncrementalIndicator.
_FACTORY: dict[str, Callable[[dict[str, Any]], IncrementalIndicator]] = {
    # Ring-buffer family
    "sma": lambda p: IncrementalSMA(period=p.get("period", c.DEFAULT_SMA_PERIOD)),
    "sd": lambda p: IncrementalSD(period=p.get("period", c.DEFAULT_SD_PERIOD)),
    "roc": lambda p: IncrementalROC(period=p.get("period", c.DEFAULT_ROC_PERIOD)),
    "er": lambda p: IncrementalER(period=p.get("period", c.DEFAULT_ER_PERIOD)),
    # Exponential family
    "ema": lambda p: IncrementalEMA(period=p.get("period", c.DEFAULT_EMA_PERIOD)),
    "tr": lambda _: IncrementalTrueRange(),
    "atr": lambda p: IncrementalATR(period=p.get("period", c.DEFAULT_ATR_PERIOD)),
    "obv": lambda _: IncrementalOBV(),
    # Composites
    "bb": lambda p: IncrementalBBands(
        period=p.get("period", c.DEFAULT_BB_PERIOD),
        multiplier=p.get("multiplier", c.DEFAULT_BB_MULTIPLIER),
    ),
    "kc": lambda p: IncrementalKC(
        period=p.get("period", c.DEFAULT_KC_PERIOD),
        multiplier=p.get("multiplier", c.DEFAULT_KC_MULTIPLIER),
    ),
    "macd": lambda p: IncrementalMACD(
        fast=p.get("fast", c.DEFAULT_FAST_PERIOD),
        slow=p.get("slow", c.DEFAULT_SLOW_PERIOD),
        signal=p.get("signal", c.DEFAULT_SIGNAL_PERIOD),
    ),
    "ppo": lambda p: IncrementalPPO(
        fast=p.get("fast", c.DEFAULT_FAST_PERIOD),
        slow=p.get("slow", c.DEFAULT_SLOW_PERIOD),
        signal=p.get("signal", c.DEFAULT_SIGNAL_PERIOD),
    ),
}


def create_incremental_indicator(
    indicator_type: str,
    params: dict[str, Any] | None = None,
) -> IncrementalIndicator:
    """
    Create an incremental indicator from type and params.

    Raises:
        UnknownIndicatorError: If the type is not registered.
        ValueError: If params contains unknown keys.
        InvalidParameter: If a period or multiplier is out of domain.
    """
    indicator_type = indicator_type.strip().lower()
    params = params or {}

    factory_fn = _FACTORY.get(indicator_type)
    if factory_fn is None:
        raise UnknownIndicatorError(
            f"Unknown indicator type '{indicator_type}'\n"
            f"\n"
            f"Fix: use one of {', '.join(list_incremental_indicators())}"
        )
    _validate_params(indicator_type, params)

    indicator = factory_fn(params)
    get_logger().indicator("CREATED", str(indicator), type=indicator_type)
    return indicator


def parse_indicator_spec(spec: str) -> tuple[str, dict[str, Any]]:
    """
    Split "bb:20,2" into ("bb", {"period": 20, "multiplier": "2"}).

    Period-like params become ints; multipliers stay strings so they reach
    Decimal without a float round trip.

    Raises:
        UnknownIndicatorError: If the type is not registered.
        ValueError: If there are more args than params, or a period is not an int.
    """
    name, _, arg_str = spec.partition(":")
    indicator_type = name.strip().lower()
    if indicator_type not in _PARAMS:
        raise UnknownIndicatorError(
            f"Unknown indicator type '{indicator_type}' in spec '{spec}'\n"
            f"\n"
            f"Fix: use one of {', '.join(list_incremental_indicators())}"
        )

    args = [a.strip() for a in arg_str.split(",") if a.strip()] if arg_str else []
    names = _PARAMS[indicator_type]
    if len(args) > len(names):
        raise ValueError(
            f"'{indicator_type}' takes at most {len(names)} args "
            f"({', '.join(names) or 'none'}), got {len(args)} in '{spec}'"
        )

    params: dict[str, Any] = {}
    for param_name, raw in zip(names, args):
        if param_name == "multiplier":
            params[param_name] = raw
        else:
            try:
                params[param_name] = int(raw)
            except ValueError:
                raise ValueError(
                    f"'{param_name}' must be an integer, got '{raw}' in '{spec}'"
                ) from None
    return indicator_type, params


def list_incremental_indicators() -> list[str]:
    """Registered indicator type keys, sorted."""
    return sorted(_FACTORY)
