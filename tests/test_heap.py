"""Tests for the bounded top-K selector."""

from fuzzyrank import Result
from fuzzyrank.heap import MinHeap, TopK


def _result(score, name="x"):
    return Result(target=name, score=score, indexes=[])


class TestMinHeap:
    """Tests for MinHeap."""

    def test_pop_in_ascending_order(self):
        heap = MinHeap()
        for score in [5, -3, 0, 2]:
            heap.push(score, score)
        assert [heap.pop() for _ in range(4)] == [-3, 0, 2, 5]

    def test_replace_top(self):
        heap = MinHeap()
        heap.push(1, "a")
        heap.push(2, "b")
        assert heap.replace_top(3, "c") == "a"
        assert heap.peek_score() == 2

    def test_drain_descending(self):
        heap = MinHeap()
        for score in [1, 3, 2]:
            heap.push(score, score)
        assert heap.drain_descending() == [3, 2, 1]
        assert len(heap) == 0

    def test_ties_do_not_compare_items(self):
        """Items without ordering can share a score."""
        heap = MinHeap()
        heap.push(0, object())
        heap.push(0, object())
        assert len(heap.drain_descending()) == 2


class TestTopK:
    """Tests for TopK."""

    def test_unbounded(self):
        top = TopK()
        for score in [-5, -1, -3]:
            top.push(_result(score))
        ranked = top.drain()
        assert [r.score for r in ranked] == [-1, -3, -5]
        assert ranked.total == 3

    def test_limit_keeps_best_and_counts_overflow(self):
        top = TopK(limit=2)
        for score in [-5, -1, -3, -10, 0]:
            top.push(_result(score))
        assert top.overflow == 3
        ranked = top.drain()
        assert [r.score for r in ranked] == [0, -1]
        assert ranked.total == 5

    def test_equal_score_does_not_replace(self):
        top = TopK(limit=1)
        first = _result(-1, "first")
        top.push(first)
        top.push(_result(-1, "second"))
        ranked = top.drain()
        assert ranked[0] is first
        assert ranked.total == 2

    def test_worst_score(self):
        top = TopK(limit=3)
        assert top.worst_score is None
        top.push(_result(-4))
        top.push(_result(-2))
        assert top.worst_score == -4

    def test_empty_drain(self):
        ranked = TopK(limit=5).drain()
        assert ranked == []
        assert ranked.total == 0
