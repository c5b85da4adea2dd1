"""
Incremental state primitives for O(1) hot-loop operations.

Provides the fixed-capacity circular buffer that backs the windowed
indicators (SMA, SD, ROC, ER).

Performance Contract:
- RingBuffer.push(): O(1)
- RingBuffer.oldest: O(1)
- RingBuffer.__getitem__(): O(1)
- RingBuffer.__iter__(): O(size), two slice scans around the cursor
"""

from __future__ import annotations

import numbers
from decimal import Decimal
from typing import Iterator

from ..errors import InvalidParameter
from ..utils.helpers import ZERO


class RingBuffer:
    """
    Fixed-size circular buffer of decimals with an explicit write cursor.

    The backing list is allocated once, zero-filled, and never resized.
    Each push overwrites the slot under the cursor and hands back the value
    it evicted, so running aggregates can be updated from the
    (inserted, evicted) pair without rescanning the window.

    Elements are accessed by index where 0 is the oldest element
    and len-1 is the most recently pushed element.

    Example:
        >>> buf = RingBuffer(size=3)
        >>> buf.push(Decimal(1))
        Decimal('0')
        >>> buf.push(Decimal(2))
        Decimal('0')
        >>> buf.push(Decimal(3))
        Decimal('0')
        >>> buf.is_full()
        True
        >>> buf.push(Decimal(4))  # overwrites 1
        Decimal('1')
        >>> list(buf)
        [Decimal('2'), Decimal('3'), Decimal('4')]

    Attributes:
        size: Maximum number of elements the buffer can hold.
    """

    __slots__ = ("size", "_buffer", "_head", "_count")

    def __init__(self, size: int) -> None:
        """
        Initialize ring buffer with fixed size.

        Args:
            size: Maximum number of elements (must be >= 1).

        Raises:
            InvalidParameter: If size < 1.
        """
        if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 1:
            raise InvalidParameter(
                f"size must be an int >= 1, got {size!r}\n"
                f"\n"
                f"Fix: RingBuffer(size=5)"
            )
        self.size = int(size)
        self._buffer: list[Decimal] = [ZERO] * size
        self._head = 0  # Next write position
        self._count = 0  # Number of elements stored

    def push(self, value: Decimal) -> Decimal:
        """
        Write a value at the cursor, overwriting the oldest if full.

        Args:
            value: Value to add.

        Returns:
            The value previously held by the overwritten slot. Decimal zero
            while the buffer is still filling.
        """
        evicted = self._buffer[self._head]
        self._buffer[self._head] = value
        self._head = self._head + 1 if self._head + 1 < self.size else 0
        if self._count < self.size:
            self._count += 1
        return evicted

    @property
    def oldest(self) -> Decimal:
        """
        The slot the next full-buffer push will evict.

        Once full this is the value pushed `size` calls ago. While filling
        the cursor has not wrapped yet, so physical slot 0 holds the first
        value ever pushed (decimal zero when nothing was pushed).
        """
        if self._count == self.size:
            return self._buffer[self._head]
        return self._buffer[0]

    def __getitem__(self, idx: int) -> Decimal:
        """
        Get element by logical index (0 = oldest, count-1 = newest).

        Raises:
            IndexError: If idx is out of range.
        """
        if idx < 0 or idx >= self._count:
            raise IndexError(
                f"Index {idx} out of range [0, {self._count})\n"
                f"\n"
                f"Buffer has {self._count} elements."
            )
        # Physical index: oldest element is at (_head - _count) mod size
        physical = (self._head - self._count + idx) % self.size
        return self._buffer[physical]

    def __iter__(self) -> Iterator[Decimal]:
        """Yield stored values oldest to newest."""
        # While filling _head == _count, so the first scan is empty
        yield from self._buffer[self._head:self._count]
        yield from self._buffer[:self._head]

    def __len__(self) -> int:
        """Return the number of elements currently in the buffer."""
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RingBuffer):
            return NotImplemented
        return (
            self.size == other.size
            and self._head == other._head
            and self._count == other._count
            and self._buffer == other._buffer
        )

    def __repr__(self) -> str:
        return f"RingBuffer(size={self.size}, values={list(self)!r})"

    def is_full(self) -> bool:
        """True if buffer contains exactly 'size' elements."""
        return self._count == self.size

    def clear(self) -> None:
        """Zero every slot and rewind the cursor, keeping the allocation."""
        for i in range(self.size):
            self._buffer[i] = ZERO
        self._head = 0
        self._count = 0
