"""The public matching surface: single matches, ranking, preparation.

``Fuzzysort`` instances carry default options; module-level functions in
``fuzzyrank`` are bound to a default instance. All instances share the
process-wide caches in ``fuzzyrank.cache``.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from fuzzyrank import cache
from fuzzyrank.exceptions import ValidationError
from fuzzyrank.highlight import highlight
from fuzzyrank.models import Prepared, Result, Results
from fuzzyrank.options import KeyPath, Options, ScoreFn
from fuzzyrank.prepare import prepare_target
from fuzzyrank.ranker import rank, rank_no_typo
from fuzzyrank.scheduler import Ranking, RankTask

Target = Union[str, Prepared]


def _check_search(search: Any) -> None:
    if search is not None and not isinstance(search, str):
        raise ValidationError(f"search must be a string, got {type(search).__name__}")


class Fuzzysort:
    """
    Fuzzy matcher with instance-level default options.

    Per-call options override the instance defaults whenever they are not
    None. Instances isolate configuration only: caches are shared.

    Warning:
        Instances hold no per-call state, so one instance can be shared
        between threads; the shared caches are lock-protected.

    Example:
        >>> strict = Fuzzysort(allow_typo=False, limit=20)
        >>> strict.go("mr", ["Monitor.cpp", "MeshRenderer.cpp"])[0].target
        'MeshRenderer.cpp'
    """

    def __init__(
        self,
        allow_typo: Optional[bool] = None,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        key: Optional[KeyPath] = None,
        keys: Optional[Sequence[KeyPath]] = None,
        score_fn: Optional[ScoreFn] = None,
    ):
        self.options = Options(
            allow_typo=allow_typo,
            threshold=threshold,
            limit=limit,
            key=key,
            keys=keys,
            score_fn=score_fn,
        ).validate()

    def new(self, **options: Any) -> "Fuzzysort":
        """Create an independent instance with its own default options."""
        return Fuzzysort(**options)

    def single(
        self,
        search: Optional[str],
        target: Optional[Target],
        allow_typo: Optional[bool] = None,
    ) -> Optional[Result]:
        """
        Match a query against one candidate.

        Args:
            search: The query.
            target: Candidate string or prepared candidate.
            allow_typo: Allow one adjacent transposition (default True).

        Returns:
            A Result, or None when either side is empty or there is no match.
            ``threshold`` is not applied here.

        Example:
            >>> single("fs", "Fuzzy Search").score
            -16
        """
        _check_search(search)
        if not search:
            return None
        search_codes = self.get_prepared_search(search)

        if not target:
            return None
        if not isinstance(target, Prepared):
            target = self.get_prepared(str(target))

        options = self.options.merged(allow_typo=allow_typo)
        return rank(search_codes, target, allow_typo=options.typo)

    def _ranking(self, search: Optional[str], targets: Sequence[Any], overrides: dict) -> Optional[Ranking]:
        _check_search(search)
        options = self.options.merged(**overrides)
        if not search or not targets:
            return None
        search_codes = cache.get_prepared_search(search)
        algorithm = self.algorithm if options.typo else self.algorithm_no_typo

        def match(target: Target) -> Optional[Result]:
            if not isinstance(target, Prepared):
                target = cache.get_prepared(target)
            return algorithm(search_codes, target)

        return Ranking(targets, match, options)

    def go(
        self,
        search: Optional[str],
        targets: Sequence[Any],
        *,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        allow_typo: Optional[bool] = None,
        key: Optional[KeyPath] = None,
        keys: Optional[Sequence[KeyPath]] = None,
        score_fn: Optional[ScoreFn] = None,
    ) -> Results:
        """
        Rank candidates against a query, best first.

        Args:
            search: The query.
            targets: Strings, prepared candidates, or records (with key/keys).
            threshold: Drop results scoring below this.
            limit: Keep at most this many results.
            allow_typo: Allow one adjacent transposition (default True).
            key: Property path to match in each record.
            keys: Several property paths; results are KeysResult lists.
            score_fn: Reduces a KeysResult to one score.

        Returns:
            Results sorted by descending score. ``total`` also counts the
            matches that were dropped because of ``limit``.

        Example:
            >>> [r.target for r in go("mr", ["Monitor.cpp", "MeshRenderer.cpp"])]
            ['MeshRenderer.cpp', 'Monitor.cpp']
        """
        ranking = self._ranking(
            search,
            targets,
            dict(threshold=threshold, limit=limit, allow_typo=allow_typo, key=key, keys=keys, score_fn=score_fn),
        )
        if ranking is None:
            return Results()
        return ranking.run()

    def go_async(
        self,
        search: Optional[str],
        targets: Sequence[Any],
        *,
        threshold: Optional[float] = None,
        limit: Optional[int] = None,
        allow_typo: Optional[bool] = None,
        key: Optional[KeyPath] = None,
        keys: Optional[Sequence[KeyPath]] = None,
        score_fn: Optional[ScoreFn] = None,
    ) -> RankTask:
        """
        Like :meth:`go`, but runs in chunks on the running asyncio loop.

        Must be called from a coroutine (or with an event loop running).
        Await the returned task for the Results; call ``cancel()`` on it to
        stop the run, after which awaiting raises ``CanceledError``.
        """
        ranking = self._ranking(
            search,
            targets,
            dict(threshold=threshold, limit=limit, allow_typo=allow_typo, key=key, keys=keys, score_fn=score_fn),
        )
        if ranking is None:
            ranking = Ranking([], lambda target: None, self.options)
        return RankTask(ranking)

    highlight = staticmethod(highlight)

    def prepare(self, target: Optional[str]) -> Optional[Prepared]:
        """Prepare a candidate up front, bypassing the cache."""
        return prepare_target(target)

    def get_prepared(self, target: str) -> Optional[Prepared]:
        return cache.get_prepared(target)

    def get_prepared_search(self, search: str) -> Optional[tuple[int, ...]]:
        return cache.get_prepared_search(search)

    def algorithm(self, search_codes: Sequence[int], prepared: Prepared) -> Optional[Result]:
        return rank(search_codes, prepared)

    def algorithm_no_typo(self, search_codes: Sequence[int], prepared: Prepared) -> Optional[Result]:
        return rank_no_typo(search_codes, prepared)

    def cleanup(self) -> None:
        """Clear the shared query and candidate caches."""
        cache.cleanup()

    def __repr__(self) -> str:
        return f"Fuzzysort({self.options!r})"


__all__ = ["Fuzzysort"]
