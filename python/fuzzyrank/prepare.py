"""Preprocessing of queries and candidates.

Both sides are compared as sequences of case-folded code points. Candidates
additionally carry a table of "beginnings" (word starts) that the strict
matching phase uses as anchors.
"""

from __future__ import annotations

from typing import Optional

from fuzzyrank.models import Prepared


def _fold(ch: str) -> int:
    lower = ch.lower()
    # Some characters lowercase to several code points ("İ"); keep the
    # original so folded codes stay aligned with the string
    return ord(lower) if len(lower) == 1 else ord(ch)


def fold_codes(s: Optional[str]) -> Optional[tuple[int, ...]]:
    """Case-fold a string into one code point per character.

    Returns None for an empty or missing string, meaning nothing to match.

    Example:
        >>> fold_codes("Ab")
        (97, 98)
    """
    if not s:
        return None
    return tuple(_fold(ch) for ch in s)


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_alnum(ch: str) -> bool:
    return "A" <= ch <= "Z" or "a" <= ch <= "z" or "0" <= ch <= "9"


def beginning_indexes(target: str) -> list[int]:
    """Positions in ``target`` where a word begins.

    A position is a beginning when it starts a run of uppercase letters, when
    it follows a non-alphanumeric character, or when it is itself not
    alphanumeric. Index 0 is always a beginning. Only ASCII letters and
    digits count as alphanumeric.

    Example:
        >>> beginning_indexes("MeshRenderer.cpp")
        [0, 4, 12, 13]
    """
    beginnings = []
    was_upper = False
    was_alnum = False
    for i, ch in enumerate(target):
        is_upper = _is_upper(ch)
        is_alnum = is_upper or _is_alnum(ch)
        if (is_upper and not was_upper) or not was_alnum or not is_alnum:
            beginnings.append(i)
        was_upper = is_upper
        was_alnum = is_alnum
    return beginnings


def next_beginning_indexes(target: str) -> list[int]:
    """For each index i, the first beginning strictly after i.

    ``len(target)`` stands for "no further beginning". Looking up ``i - 1``
    therefore gives the first beginning at or after ``i``.

    Example:
        >>> next_beginning_indexes("Fuzzy Search")
        [5, 5, 5, 5, 5, 6, 12, 12, 12, 12, 12, 12]
    """
    target_len = len(target)
    beginnings = beginning_indexes(target)
    table = [target_len] * target_len
    pos = 0
    for i in range(target_len):
        while pos < len(beginnings) and beginnings[pos] <= i:
            pos += 1
        if pos < len(beginnings):
            table[i] = beginnings[pos]
    return table


def prepare_target(target: Optional[str], eager: bool = False) -> Optional[Prepared]:
    """Prepare a candidate without consulting the cache.

    With ``eager`` the next-beginning table is built now instead of on the
    first strict match.
    """
    if not target:
        return None
    prepared = Prepared(target=target, codes=fold_codes(target))
    if eager:
        prepared._next_beginnings = next_beginning_indexes(target)
    return prepared


def prepare_search(search: Optional[str]) -> Optional[tuple[int, ...]]:
    """Fold a query without consulting the cache."""
    return fold_codes(search)


__all__ = [
    "fold_codes",
    "beginning_indexes",
    "next_beginning_indexes",
    "prepare_target",
    "prepare_search",
]
