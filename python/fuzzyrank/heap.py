"""Bounded top-K selection over a stream of scored results."""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Generic, Optional, TypeVar

from fuzzyrank.models import Results

T = TypeVar("T")


class MinHeap(Generic[T]):
    """Binary min-heap keyed by a numeric score.

    Entries with equal scores are ordered by insertion, so the earlier
    insertion is treated as the smaller one.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[Any, int, T]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, score: Any, item: T) -> None:
        heapq.heappush(self._heap, (score, next(self._counter), item))

    def peek_score(self) -> Any:
        return self._heap[0][0]

    def pop(self) -> T:
        return heapq.heappop(self._heap)[2]

    def replace_top(self, score: Any, item: T) -> T:
        """Pop the smallest entry and push a new one in a single sift."""
        return heapq.heapreplace(self._heap, (score, next(self._counter), item))[2]

    def drain_descending(self) -> list[T]:
        """Empty the heap, returning items from largest to smallest."""
        items = [self.pop() for _ in range(len(self._heap))]
        items.reverse()
        return items


class TopK:
    """Keeps the ``limit`` best results seen so far.

    The heap root is the worst kept result, so a better newcomer replaces it
    in O(log K). Results that arrive once the selector is full are counted in
    ``overflow`` whether or not they displace anything.

    Example:
        >>> top = TopK(limit=2)
        >>> for r in results:
        ...     top.push(r)
        >>> ranked = top.drain()
        >>> ranked.total  # kept + overflow
    """

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self.overflow = 0
        self._heap: MinHeap[Any] = MinHeap()

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def worst_score(self) -> Any:
        return self._heap.peek_score() if len(self._heap) else None

    def push(self, result: Any) -> None:
        """Offer a result; it must expose a ``score`` attribute."""
        score = result.score
        if self.limit is None or len(self._heap) < self.limit:
            self._heap.push(score, result)
            return
        self.overflow += 1
        if score > self._heap.peek_score():
            self._heap.replace_top(score, result)

    def drain(self) -> Results:
        """Empty the selector into a best-first ``Results`` list."""
        kept = len(self._heap)
        return Results(self._heap.drain_descending(), total=kept + self.overflow)


__all__ = ["MinHeap", "TopK"]
