"""Data models for fuzzyrank.

- Prepared: the per-candidate preprocessing (folded codes, lazy boundary
  table). Cached and shared between queries, so it is never scored in place.
- Result: one scored match of a query against a candidate.
- KeysResult: the per-key results of one record in keys mode.
- Results: a ranked list of results carrying the pre-limit ``total``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional


@dataclass(slots=True, eq=False)
class Prepared:
    """
    A candidate string prepared for matching.

    Attributes
    ----------
    target : str
        The original candidate string.
    codes : tuple[int, ...]
        Case-folded code point per character of ``target``.
    """

    target: str
    codes: tuple[int, ...]
    _next_beginnings: Optional[list[int]] = field(default=None, repr=False)

    @property
    def next_beginnings(self) -> list[int]:
        """Next-beginning table, computed on first access and kept."""
        if self._next_beginnings is None:
            from fuzzyrank.prepare import next_beginning_indexes

            self._next_beginnings = next_beginning_indexes(self.target)
        return self._next_beginnings

    def __len__(self) -> int:
        return len(self.codes)


@dataclass(slots=True)
class Result:
    """
    A successful match of a query against one candidate.

    Attributes
    ----------
    target : str
        The candidate string that matched.
    score : int
        Always <= 0; 0 means the query equals the candidate (case-folded).
    indexes : list[int]
        Strictly increasing positions in ``target`` of each query character.
    obj : Any
        The record the target was read from in key mode, else None.
    """

    target: str
    score: int
    indexes: list[int]
    obj: Any = None


class KeysResult(list):
    """Per-key results (``Result`` or ``None``) for one record in keys mode.

    ``score`` is the aggregate produced by the score function and ``obj`` is
    the record the keys were read from.
    """

    __slots__ = ("score", "obj")

    def __init__(self, results: Iterable[Optional[Result]] = (), obj: Any = None):
        super().__init__(results)
        self.obj = obj
        self.score: Optional[float] = None

    def __repr__(self) -> str:
        return f"KeysResult({list.__repr__(self)}, score={self.score!r})"


class Results(list):
    """Ranked results, best first.

    ``total`` counts every result that passed the threshold, including the
    ones dropped because of ``limit``.
    """

    __slots__ = ("total",)

    def __init__(self, results: Iterable[Any] = (), total: int = 0):
        super().__init__(results)
        self.total = total

    def __repr__(self) -> str:
        return f"Results({list.__repr__(self)}, total={self.total})"


__all__ = ["Prepared", "Result", "KeysResult", "Results"]
