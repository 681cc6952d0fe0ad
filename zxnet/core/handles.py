"""Generation-tagged handles and the slot allocator behind them."""

from __future__ import annotations

import heapq
from typing import NamedTuple

__all__ = ["VertexIx", "EdgeIx", "SlotTable"]


class VertexIx(NamedTuple):
    index: int
    generation: int = 0

    def __repr__(self):
        return f"V{self.index}" if self.generation == 0 else f"V{self.index}@{self.generation}"


class EdgeIx(NamedTuple):
    index: int
    generation: int = 0

    def __repr__(self):
        return f"E{self.index}" if self.generation == 0 else f"E{self.index}@{self.generation}"


class SlotTable:
    """Dense slot allocator with reuse of freed indices.

    Freed indices are handed out again lowest first, each time with a bumped
    generation, so a handle kept across a removal no longer matches the slot.

    Parameters
    ----------
    handle_type : type
        :class:`VertexIx` or :class:`EdgeIx`.

    """

    def __init__(self, handle_type):
        self._handle_type = handle_type
        self._generation = []  # slot -> current generation
        self._live = []  # slot -> occupied?
        self._free = []  # min-heap of free slots
        self._count = 0

    def allocate(self):
        if self._free:
            slot = heapq.heappop(self._free)
        else:
            slot = len(self._live)
            self._live.append(False)
            self._generation.append(0)
        self._live[slot] = True
        self._count += 1
        return self._handle_type(slot, self._generation[slot])

    def release(self, handle) -> bool:
        """Free the slot of a live handle; False if it was not live."""
        if not self.is_live(handle):
            return False
        slot = handle.index
        self._live[slot] = False
        self._generation[slot] += 1
        heapq.heappush(self._free, slot)
        self._count -= 1
        return True

    def is_live(self, handle) -> bool:
        if not isinstance(handle, self._handle_type):
            return False
        index, generation = handle
        if index < 0 or index >= len(self._live):
            return False
        return self._live[index] and self._generation[index] == generation

    def handle_at(self, index: int):
        """Live handle occupying ``index``, or None."""
        if 0 <= index < len(self._live) and self._live[index]:
            return self._handle_type(index, self._generation[index])
        return None

    @property
    def capacity(self) -> int:
        return len(self._live)

    def clear(self):
        for slot, live in enumerate(self._live):
            if live:
                self._live[slot] = False
                self._generation[slot] += 1
        self._free = list(range(len(self._live)))
        self._count = 0

    def __iter__(self):
        gen = self._generation
        for slot, live in enumerate(self._live):
            if live:
                yield self._handle_type(slot, gen[slot])

    def __len__(self):
        return self._count
