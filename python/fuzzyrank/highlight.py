"""Render match positions as marked-up text."""

from __future__ import annotations

from typing import Optional

from fuzzyrank.models import Result


def highlight(result: Optional[Result], open_tag: str = "<b>", close_tag: str = "</b>") -> Optional[str]:
    """Wrap each run of matched characters in ``open_tag``/``close_tag`` markers.

    Args:
        result: A match result, or None.
        open_tag: Marker inserted before each run of matched characters.
        close_tag: Marker inserted after each run.

    Returns:
        The marked-up target, or None when ``result`` is None.

    Example:
        >>> highlight(single("fs", "Fuzzy Search"))
        '<b>F</b>uzzy <b>S</b>earch'
    """
    if result is None:
        return None

    target = result.target
    matched = set(result.indexes)
    parts = []
    opened = False
    for i, ch in enumerate(target):
        if i in matched:
            if not opened:
                parts.append(open_tag)
                opened = True
        elif opened:
            parts.append(close_tag)
            opened = False
        parts.append(ch)
    if opened:
        parts.append(close_tag)
    return "".join(parts)


__all__ = ["highlight"]
