"""
frontier.py — Frontier Disciplines
===================================
The frontier is the only place the five algorithms differ in WHICH
position is expanded next:

    • StackFrontier     – newest first              (DFS)
    • QueueFrontier     – oldest first              (BFS)
    • PriorityFrontier  – smallest key first        (Dijkstra, A*, Greedy)

All three share push / pop / __len__ so the search loop never needs to
know which one it holds.

PriorityFrontier is a binary heap with decrease-key by lazy deletion:
pushing a position that is already pending with a worse key leaves the
old heap entry behind as stale, and pop() skips stale entries.  Every
entry carries an insertion counter so equal keys pop in insertion order.
"""

import heapq
import itertools
from collections import deque
from typing import Callable, Deque, Dict, List, Tuple

from grid import Position


class StackFrontier:
    def __init__(self):
        self._items: List[Position] = []

    def push(self, pos: Position) -> None:
        self._items.append(pos)

    def pop(self) -> Position:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, pos: Position) -> bool:
        return pos in self._items


class QueueFrontier:
    def __init__(self):
        self._items: Deque[Position] = deque()

    def push(self, pos: Position) -> None:
        self._items.append(pos)

    def pop(self) -> Position:
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, pos: Position) -> bool:
        return pos in self._items


class PriorityFrontier:
    """
    Min-heap keyed by `key_fn(pos)`, evaluated at push time.

    Attributes:
        _heap    : [(key, seq, pos), …]   may contain stale entries
        _pending : {pos: key}             the live entry for each position
    """

    def __init__(self, key_fn: Callable[[Position], float]):
        self._key_fn = key_fn
        self._heap: List[Tuple[float, int, Position]] = []
        self._pending: Dict[Position, float] = {}
        self._counter = itertools.count()

    def push(self, pos: Position) -> None:
        key = self._key_fn(pos)
        current = self._pending.get(pos)
        if current is not None and current <= key:
            return
        self._pending[pos] = key
        heapq.heappush(self._heap, (key, next(self._counter), pos))

    def pop(self) -> Position:
        while self._heap:
            key, _, pos = heapq.heappop(self._heap)
            if self._pending.get(pos) == key:
                del self._pending[pos]
                return pos
            # stale: superseded by a cheaper push, or already popped
        raise IndexError("pop from empty frontier")

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, pos: Position) -> bool:
        return pos in self._pending
