"""Polars expression namespace for fuzzy ranking.

This module registers a `.fuzzy` namespace on Polars expressions, so
matching a literal query against a string column can be chained directly in
Polars expression contexts.

Warning:
    Each row goes through ``map_elements``. For ranking a large column
    against one query, ``fuzzyrank.rank_series`` avoids scoring rows it does
    not need to keep.

Example:
    >>> import polars as pl
    >>> import fuzzyrank  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"file": ["MeshRenderer.cpp", "Monitor.cpp", "main.py"]})
    >>> df.with_columns(score=pl.col("file").fuzzy.score("mr"))
"""

from typing import Optional

import polars as pl

from fuzzyrank.highlight import highlight as _highlight
from fuzzyrank.sorter import Fuzzysort

_sorter = Fuzzysort()


@pl.api.register_expr_namespace("fuzzy")
class FuzzyExprNamespace:
    """
    Fuzzy ranking namespace for Polars expressions.

    Access via `.fuzzy` on any string expression. Null values stay null.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(self, query: str, allow_typo: Optional[bool] = None) -> pl.Expr:
        """
        Score each value against a query.

        Args:
            query: The query string
            allow_typo: Allow one adjacent transposition (default True)

        Returns:
            Int64 expression; null where the value does not match

        Example:
            >>> df.with_columns(score=pl.col("file").fuzzy.score("mr"))
        """

        def score_value(value):
            result = _sorter.single(query, str(value), allow_typo=allow_typo)
            return result.score if result is not None else None

        return self._expr.map_elements(score_value, return_dtype=pl.Int64)

    def is_match(
        self,
        query: str,
        threshold: Optional[float] = None,
        allow_typo: Optional[bool] = None,
    ) -> pl.Expr:
        """
        Check whether each value matches a query, optionally above a threshold.

        Args:
            query: The query string
            threshold: Minimum score counted as a match
            allow_typo: Allow one adjacent transposition (default True)

        Returns:
            Boolean expression (False for values that do not match)

        Example:
            >>> df.filter(pl.col("file").fuzzy.is_match("mr", threshold=-100))
        """
        score = self.score(query, allow_typo=allow_typo)
        matched = score.is_not_null()
        if threshold is not None:
            matched = matched & (score >= threshold)
        return matched.fill_null(False)

    def highlight(
        self,
        query: str,
        open_tag: str = "<b>",
        close_tag: str = "</b>",
        allow_typo: Optional[bool] = None,
    ) -> pl.Expr:
        """
        Mark up the characters of each value matched by a query.

        Args:
            query: The query string
            open_tag: Marker inserted before each run of matched characters
            close_tag: Marker inserted after each run
            allow_typo: Allow one adjacent transposition (default True)

        Returns:
            Utf8 expression; null where the value does not match

        Example:
            >>> df.with_columns(marked=pl.col("file").fuzzy.highlight("mr", "[", "]"))
        """

        def highlight_value(value):
            result = _sorter.single(query, str(value), allow_typo=allow_typo)
            return _highlight(result, open_tag, close_tag)

        return self._expr.map_elements(highlight_value, return_dtype=pl.Utf8)
