#!/usr/bin/env python3
"""
Bump allocator with scoped checkpoints.

Responsibilities
- Hand out aligned slices of one preallocated bytearray (`reserve`).
- Report and rewind the allocation offset (`current_offset`, `restore`).
- Provide `checkpoint()`, a context manager that records the offset on entry
  and restores it on every exit path, so transient users stay strictly LIFO.

There is no individual free and no resize of live allocations. Memory handed
out before a checkpoint stays valid; memory handed out inside it must not be
used after the checkpoint exits.

Usage
    with arena.checkpoint():
        accels = arena.reserve_doubles(2 * n)
        if accels is None:
            return False
        ...
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from .constants import ARENA_ALIGNMENT

DOUBLE_SIZE = 8


class ScratchArena:
    """
    Fixed-size arena. `reserve` returns None instead of raising when the
    arena is exhausted, so callers can treat exhaustion as a soft failure.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"arena size must be >= 0, got {size}")
        self.size = int(size)
        self._buffer = bytearray(self.size)
        self._view = memoryview(self._buffer)
        self._offset = 0
        self.high_water = 0

    def __repr__(self) -> str:
        return f"ScratchArena(size={self.size}, offset={self._offset}, high_water={self.high_water})"

    @property
    def remaining(self) -> int:
        return self.size - self._offset

    def current_offset(self) -> int:
        return self._offset

    def reserve(self, nbytes: int) -> Optional[memoryview]:
        """
        Reserve `nbytes` bytes and return a writable view over them.

        The start of every reservation is aligned to ARENA_ALIGNMENT. Contents
        are not cleared; memory reused after a restore holds stale data.

        Returns:
            A memoryview of length `nbytes`, or None if the arena cannot fit it.
        """
        if nbytes < 0:
            raise ValueError(f"cannot reserve a negative size ({nbytes})")
        start = -(-self._offset // ARENA_ALIGNMENT) * ARENA_ALIGNMENT
        end = start + nbytes
        if end > self.size:
            return None
        self._offset = end
        if end > self.high_water:
            self.high_water = end
        return self._view[start:end]

    def reserve_doubles(self, count: int) -> Optional[memoryview]:
        """Reserve room for `count` floats and return it as a 'd' view."""
        if count < 0:
            raise ValueError(f"cannot reserve a negative count ({count})")
        raw = self.reserve(count * DOUBLE_SIZE)
        if raw is None:
            return None
        return raw.cast("d")

    def restore(self, offset: int) -> None:
        """Rewind the arena to an offset previously returned by current_offset()."""
        if offset < 0 or offset > self._offset:
            raise ValueError(
                f"cannot restore arena to offset {offset} (current offset {self._offset})"
            )
        self._offset = offset

    @contextmanager
    def checkpoint(self) -> Iterator[int]:
        mark = self._offset
        try:
            yield mark
        finally:
            self.restore(mark)
