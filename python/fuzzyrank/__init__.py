"""
fuzzyrank - fuzzy finder style ranking of short queries against candidates

Scores how well a query matches candidate strings the way code-oriented fuzzy
finders do: subsequence matching that prefers consecutive runs and word
beginnings ("mr" -> "MeshRenderer"), with tolerance for one transposed pair of
characters.

Example usage:
    >>> import fuzzyrank as fr

    # Score one candidate
    >>> fr.single("fs", "Fuzzy Search").score
    -16
    >>> fr.single("doesnt exist", "target") is None
    True

    # Rank many candidates, best first
    >>> results = fr.go("mr", ["Monitor.cpp", "MeshRenderer.cpp"])
    >>> [(r.target, r.score) for r in results]
    [('MeshRenderer.cpp', -18), ('Monitor.cpp', -6009)]

    # Mark up matched characters
    >>> fr.highlight(fr.single("fs", "Fuzzy Search"))
    '<b>F</b>uzzy <b>S</b>earch'
"""

import logging
from importlib.metadata import version as _get_version

# Register the .fuzzy expression namespace
import fuzzyrank.expr  # noqa: F401
from fuzzyrank.cache import cache_info
from fuzzyrank.exceptions import CanceledError, FuzzyRankError, ValidationError
from fuzzyrank.highlight import highlight
from fuzzyrank.index import FuzzyIndex
from fuzzyrank.models import KeysResult, Prepared, Result, Results
from fuzzyrank.options import Options, default_score_fn
from fuzzyrank.polars_ext import rank_dataframe, rank_series
from fuzzyrank.scheduler import RankTask
from fuzzyrank.sorter import Fuzzysort

logging.getLogger(__name__).addHandler(logging.NullHandler())

_default = Fuzzysort()

single = _default.single
go = _default.go
go_async = _default.go_async
prepare = _default.prepare
get_prepared = _default.get_prepared
get_prepared_search = _default.get_prepared_search
algorithm = _default.algorithm
algorithm_no_typo = _default.algorithm_no_typo
cleanup = _default.cleanup
new = _default.new

__version__ = _get_version("fuzzyrank")
__all__ = [
    # Version
    "__version__",
    # Exceptions
    "FuzzyRankError",
    "ValidationError",
    "CanceledError",
    # Result types
    "Prepared",
    "Result",
    "KeysResult",
    "Results",
    "RankTask",
    # Options
    "Options",
    "default_score_fn",
    # Matching
    "Fuzzysort",
    "single",
    "go",
    "go_async",
    "highlight",
    "prepare",
    "get_prepared",
    "get_prepared_search",
    "algorithm",
    "algorithm_no_typo",
    # Caches
    "cleanup",
    "cache_info",
    "new",
    # Index and Polars helpers
    "FuzzyIndex",
    "rank_series",
    "rank_dataframe",
]


# Convenience aliases
rank_all = go
rank_all_async = go_async
reset_cache = cleanup
