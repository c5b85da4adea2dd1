"""
Fixed-capacity state primitives for incremental indicators.
"""

from .primitives import RingBuffer

__all__ = ["RingBuffer"]
