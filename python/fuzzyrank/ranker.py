"""Two-phase fuzzy matcher and its scoring law.

Phase 1 (simple) walks the candidate once and takes every query character at
its first occurrence. It is a cheap existence test and gives a fallback set of
positions.

Phase 2 (strict) re-walks the candidate accepting a query character only
right after the previous match or at a word beginning, backtracking through
the next-beginning table when it runs off the end. A strict match is what
users expect from "mr" -> "MeshRenderer".

With typos allowed, each phase may swap one pair of adjacent query characters
(never the first character, never two equal characters) to recover from a
failure, at a fixed score penalty.

Scratch position buffers are allocated per call, so the functions here are
safe to call from several threads at once.
"""

from __future__ import annotations

from typing import Optional, Sequence

from fuzzyrank.constants import NON_STRICT_MULTIPLIER, TYPO_PENALTY
from fuzzyrank.models import Prepared, Result


def _swapped(search_i: int, typo_i: int) -> int:
    """Index of the query character to look for at ``search_i`` when the
    characters at ``typo_i`` and ``typo_i + 1`` are transposed (0 = none)."""
    if typo_i == 0:
        return search_i
    if typo_i == search_i:
        return search_i + 1
    if typo_i == search_i - 1:
        return search_i - 1
    return search_i


def _simple_match(
    search_codes: Sequence[int],
    target_codes: Sequence[int],
    allow_typo: bool,
) -> Optional[tuple[list[int], int]]:
    search_len = len(search_codes)
    target_len = len(target_codes)
    matches = [0] * search_len
    matches_len = 0
    search_i = 0
    target_i = 0
    typo_i = 0
    search_code = search_codes[0]

    while True:
        if target_i < target_len and search_code == target_codes[target_i]:
            matches[matches_len] = target_i
            matches_len += 1
            search_i += 1
            if search_i == search_len:
                return matches, typo_i
            search_code = search_codes[_swapped(search_i, typo_i)]

        target_i += 1
        if target_i < target_len:
            continue
        if not allow_typo:
            return None

        # Ran out of candidate: transpose, starting as far along the query as
        # we got and moving the swap backwards on each further failure
        while True:
            if search_i <= 1:
                return None
            if typo_i == 0:
                search_i -= 1
                if search_code == search_codes[search_i]:
                    continue
                typo_i = search_i
            else:
                if typo_i == 1:
                    return None
                typo_i -= 1
                search_i = typo_i
                search_code = search_codes[search_i + 1]
                if search_code == search_codes[search_i]:
                    continue
            matches_len = search_i
            target_i = matches[matches_len - 1] + 1
            break


def _strict_match(
    search_codes: Sequence[int],
    target_codes: Sequence[int],
    next_beginnings: Sequence[int],
    first_simple: int,
    allow_typo: bool,
) -> Optional[tuple[list[int], int]]:
    search_len = len(search_codes)
    target_len = len(target_codes)
    matches = [0] * search_len
    matches_len = 0
    search_i = 0
    typo_i = 0

    first_possible = 0 if first_simple == 0 else next_beginnings[first_simple - 1]
    target_i = first_possible
    if target_i == target_len:
        return None

    while True:
        if target_i >= target_len:
            if search_i <= 0:
                # Nothing left to push forward
                if not allow_typo:
                    return None
                typo_i += 1
                if typo_i > search_len - 2:
                    return None
                if search_codes[typo_i] == search_codes[typo_i + 1]:
                    continue
                target_i = first_possible
                continue

            # Give up the previous match and retry from the beginning after it
            search_i -= 1
            matches_len -= 1
            target_i = next_beginnings[matches[matches_len]]

        elif search_codes[_swapped(search_i, typo_i)] == target_codes[target_i]:
            matches[matches_len] = target_i
            matches_len += 1
            search_i += 1
            if search_i == search_len:
                return matches, typo_i
            target_i += 1

        else:
            target_i = next_beginnings[target_i]


def score_indexes(indexes: Sequence[int]) -> int:
    """Gap cost of a set of match positions.

    Consecutive positions are free; every position that does not directly
    follow the previous one costs its own offset.
    """
    score = 0
    last = -1
    for i in indexes:
        if last != i - 1:
            score -= i
        last = i
    return score


def rank(
    search_codes: Sequence[int],
    prepared: Prepared,
    allow_typo: bool = True,
) -> Optional[Result]:
    """Match folded query codes against a prepared candidate.

    Args:
        search_codes: Folded query codes (non-empty).
        prepared: The prepared candidate.
        allow_typo: Allow one adjacent transposition in the query.

    Returns:
        A fresh Result, or None if the query does not match.
    """
    target_codes = prepared.codes
    simple = _simple_match(search_codes, target_codes, allow_typo)
    if simple is None:
        return None
    simple_matches, simple_typo = simple

    strict = _strict_match(
        search_codes,
        target_codes,
        prepared.next_beginnings,
        simple_matches[0],
        allow_typo,
    )

    if strict is not None:
        indexes, strict_typo = strict
        score = score_indexes(indexes)
        if strict_typo != 0:
            score -= TYPO_PENALTY
    else:
        indexes = simple_matches
        score = score_indexes(indexes) * NON_STRICT_MULTIPLIER
        if simple_typo != 0:
            score -= TYPO_PENALTY

    score -= len(target_codes) - len(search_codes)
    return Result(target=prepared.target, score=score, indexes=indexes)


def rank_no_typo(search_codes: Sequence[int], prepared: Prepared) -> Optional[Result]:
    """Strict variant of :func:`rank` that never transposes characters."""
    return rank(search_codes, prepared, allow_typo=False)


__all__ = ["rank", "rank_no_typo", "score_indexes"]
