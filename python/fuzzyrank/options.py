"""Option resolution for fuzzyrank.

Options can be set on a ``Fuzzysort`` instance and overridden per call; a
per-call value wins whenever it is not None.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from numbers import Real
from typing import Any, Callable, Optional, Sequence, Union

from fuzzyrank.exceptions import ValidationError
from fuzzyrank.models import KeysResult

KeyPath = Union[str, Sequence[str]]
ScoreFn = Callable[[KeysResult], Optional[float]]


def default_score_fn(results: KeysResult) -> Optional[float]:
    """Best score among the keys that matched, or None if none did."""
    scores = [r.score for r in results if r is not None]
    return max(scores) if scores else None


@dataclass(frozen=True)
class Options:
    """
    Matching and ranking options.

    Attributes
    ----------
    allow_typo : bool
        Allow a single adjacent transposition in the query.
    threshold : float or None
        Results scoring below this are dropped. None keeps everything.
    limit : int or None
        Maximum number of results kept. None is unbounded.
    key : str or list of str or None
        Property path read from each record before matching.
    keys : list of property paths or None
        Several property paths; each record yields a KeysResult.
    score_fn : callable or None
        Reduces a KeysResult to one score. Defaults to the best key score.
    """

    allow_typo: Optional[bool] = None
    threshold: Optional[float] = None
    limit: Optional[int] = None
    key: Optional[KeyPath] = None
    keys: Optional[Sequence[KeyPath]] = None
    score_fn: Optional[ScoreFn] = None

    def merged(self, **overrides: Any) -> "Options":
        """Return a copy with every non-None override applied, validated."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValidationError(f"Unknown option(s): {sorted(unknown)}")
        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes).validate()

    def validate(self) -> "Options":
        if self.allow_typo is not None and not isinstance(self.allow_typo, bool):
            raise ValidationError(
                f"allow_typo must be a bool, got {type(self.allow_typo).__name__}"
            )
        if self.threshold is not None:
            if isinstance(self.threshold, bool) or not isinstance(self.threshold, Real):
                raise ValidationError(
                    f"threshold must be a number, got {type(self.threshold).__name__}"
                )
            if math.isnan(self.threshold):
                raise ValidationError("threshold must not be NaN")
        if self.limit is not None:
            if isinstance(self.limit, bool) or not isinstance(self.limit, int):
                raise ValidationError(f"limit must be an int, got {type(self.limit).__name__}")
            if self.limit <= 0:
                raise ValidationError(f"limit must be positive, got {self.limit}")
        if self.key is not None and self.keys is not None:
            raise ValidationError("Pass either key or keys, not both")
        if self.keys is not None and (isinstance(self.keys, str) or not self.keys):
            raise ValidationError("keys must be a non-empty list of property paths")
        if self.score_fn is not None and not callable(self.score_fn):
            raise ValidationError("score_fn must be callable")
        return self

    @property
    def typo(self) -> bool:
        return True if self.allow_typo is None else self.allow_typo

    @property
    def reducer(self) -> ScoreFn:
        return self.score_fn or default_score_fn


__all__ = ["Options", "default_score_fn", "KeyPath", "ScoreFn"]
