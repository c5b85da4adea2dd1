"""
Base class and shared validation for incremental indicators.

All incremental indicators inherit from IncrementalIndicator, which defines
the O(1) per-observation interface: update(), reset(), and a NAME(params)
label via str().
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from ...errors import InvalidParameter
from ...utils.helpers import ZERO, to_decimal


class IncrementalIndicator(ABC):
    """Base class for incremental indicators."""

    @abstractmethod
    def update(self, item: Any) -> Any:
        """Consume one observation and return the updated output."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset state to initial."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Label in NAME(params) form."""
        ...


def validate_period(name: str, value: Any) -> int:
    """
    Check a window/smoothing period.

    Raises:
        InvalidParameter: If value is not an integer >= 1.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidParameter(
            f"{name} must be an int >= 1, got {value!r}\n"
            f"\n"
            f"Fix: {name}=14"
        )
    return int(value)


def validate_multiplier(name: str, value: Any) -> Decimal:
    """
    Check a band multiplier and convert it to Decimal.

    Raises:
        InvalidParameter: If value is not a number or is <= 0.
    """
    try:
        multiplier = to_decimal(value)
    except (TypeError, ValueError):
        raise InvalidParameter(
            f"{name} must be a number, got {type(value).__name__}\n"
            f"\n"
            f"Fix: {name}=2.0"
        ) from None
    if not multiplier.is_finite() or multiplier <= ZERO:
        raise InvalidParameter(
            f"{name} must be > 0, got {value!r}\n"
            f"\n"
            f"Fix: {name}=2.0"
        )
    return multiplier
