"""
Error taxonomy for streamta.

Construction-time failures only. A successfully constructed indicator never
raises from update() for inputs that carry the capabilities it declares.
"""

from __future__ import annotations


class TaError(Exception):
    """Root of all streamta errors."""


class InvalidParameter(TaError, ValueError):
    """A period or multiplier argument is zero or otherwise out of domain."""


class DataItemIncomplete(TaError):
    """A Candle was built with one or more required fields unset."""


class DataItemInvalid(TaError, ValueError):
    """A Candle was built with inconsistent prices or negative volume."""


class UnknownIndicatorError(TaError, KeyError):
    """The factory was asked for an indicator type it does not know."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep multi-line fix hints readable
        return str(self.args[0]) if self.args else ""
