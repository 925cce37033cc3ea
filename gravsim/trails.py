#!/usr/bin/env python3
"""
Fixed-capacity position history for one body.

A TrailBuffer is a ring of (x, y) samples stored flat as [x0, y0, x1, y1, ...].
Once full, each new sample overwrites the oldest one. Iteration always walks
the valid samples oldest-to-newest, which is the order the renderer draws them.
"""
import logging
from array import array
from typing import Iterator, List, Optional, Tuple

from .arena import ScratchArena

logger = logging.getLogger(__name__)


class TrailBuffer:
    """
    Ring buffer of recent positions.

    Storage comes from `arena` when one is given (the simulation keeps trails
    in its arena so their footprint is bounded), otherwise from a private array.
    If the arena cannot supply the storage the buffer degrades to capacity 0
    and `record` becomes a no-op.
    """

    def __init__(self, capacity: int, arena: Optional[ScratchArena] = None):
        if capacity < 0:
            raise ValueError(f"trail capacity must be >= 0, got {capacity}")
        if arena is None:
            points = array("d", bytes(16 * capacity))
        else:
            points = arena.reserve_doubles(2 * capacity)
            if points is None:
                logger.warning(
                    "Arena exhausted allocating a %d-sample trail; trail disabled", capacity
                )
                capacity = 0
        self._points = points
        self.capacity = capacity
        self.head = 0
        self.count = 0

    def __repr__(self) -> str:
        return f"TrailBuffer(capacity={self.capacity}, count={self.count}, head={self.head})"

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        if self.count == 0:
            return
        pts = self._points
        start = (self.head + self.capacity - self.count) % self.capacity
        for k in range(self.count):
            idx = (start + k) % self.capacity
            yield (pts[2 * idx], pts[2 * idx + 1])

    def record(self, x: float, y: float) -> None:
        """Store a sample at `head`, overwriting the oldest one when full."""
        if self.capacity == 0:
            return
        self._points[2 * self.head] = x
        self._points[2 * self.head + 1] = y
        self.head = (self.head + 1) % self.capacity
        if self.count < self.capacity:
            self.count += 1

    def points(self) -> List[Tuple[float, float]]:
        """Valid samples, oldest first."""
        return list(self)

    def latest(self) -> Optional[Tuple[float, float]]:
        if self.count == 0:
            return None
        idx = (self.head - 1) % self.capacity
        return (self._points[2 * idx], self._points[2 * idx + 1])
