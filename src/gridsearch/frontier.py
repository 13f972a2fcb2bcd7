# src/gridsearch/frontier.py
"""
Frontier (open set) for A*: an indexed binary min-heap of Cells.

- Ordered by ascending priority (the cell's f at push/relax time).
- Ties are broken by insertion order, so pop order is deterministic.
- A position -> heap index map gives O(log n) decrease-key (relax) instead
  of draining and reinserting the whole queue.

A position can be queued at most once; the engine tracks membership through
Cell.in_open_set and calls relax() for rediscovered cells.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import EmptyFrontierError
from .grid import Cell, Position


@dataclass
class _Entry:
    priority: float
    seq: int
    cell: Cell

    def key(self) -> Tuple[float, int]:
        return (self.priority, self.seq)


class Frontier:
    """Priority-ordered collection of candidate cells awaiting expansion."""

    def __init__(self) -> None:
        self._heap: List[_Entry] = []
        self._index: Dict[Position, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, pos: object) -> bool:
        return pos in self._index

    def is_empty(self) -> bool:
        return not self._heap

    def push(self, cell: Cell) -> None:
        if cell.position in self._index:
            raise ValueError(f"Position {tuple(cell.position)} is already in the frontier")
        entry = _Entry(priority=cell.f, seq=next(self._counter), cell=cell)
        self._heap.append(entry)
        self._index[cell.position] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def peek(self) -> Cell:
        if not self._heap:
            raise EmptyFrontierError("peek() on an empty frontier")
        return self._heap[0].cell

    def pop_min(self) -> Cell:
        """Remove and return the cell with the smallest priority."""
        if not self._heap:
            raise EmptyFrontierError("pop_min() on an empty frontier")
        last = len(self._heap) - 1
        self._swap(0, last)
        entry = self._heap.pop()
        del self._index[entry.cell.position]
        if self._heap:
            self._sift_down(0)
        return entry.cell

    def relax(self, pos: Position, new_f: float) -> None:
        """
        Decrease the priority of an already-queued position.

        The entry keeps its first insertion sequence for tie-breaking.
        """
        try:
            i = self._index[pos]
        except KeyError:
            raise KeyError(f"Position {tuple(pos)} is not in the frontier") from None
        entry = self._heap[i]
        if new_f > entry.priority:
            raise ValueError(
                f"relax() can only lower a priority ({new_f} > {entry.priority})"
            )
        entry.priority = new_f
        self._sift_up(i)

    def clear(self) -> List[Cell]:
        """Drain the frontier, returning the cells that were still queued."""
        drained = [entry.cell for entry in self._heap]
        self._heap.clear()
        self._index.clear()
        return drained

    # ------------------------------------------------------------------
    # Heap internals
    # ------------------------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._index[heap[i].cell.position] = i
        self._index[heap[j].cell.position] = j

    def _sift_up(self, i: int) -> None:
        heap = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if heap[i].key() < heap[parent].key():
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = 2 * i + 1
            right = left + 1
            smallest = i
            if left < n and heap[left].key() < heap[smallest].key():
                smallest = left
            if right < n and heap[right].key() < heap[smallest].key():
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
