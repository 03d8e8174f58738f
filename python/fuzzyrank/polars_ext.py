"""High-level Polars Series and DataFrame ranking for fuzzyrank.

Functions in This Module
------------------------
- ``rank_series()``: Rank the values of a Series against a query
- ``rank_dataframe()``: Rank DataFrame rows by their best-matching column

Both walk the data through the regular ranking pipeline, so ``limit`` keeps
only the best rows without sorting every match.

Example Usage
-------------
>>> import polars as pl
>>> import fuzzyrank as fr
>>>
>>> files = pl.Series(["MeshRenderer.cpp", "Monitor.cpp", "main.py"])
>>> fr.rank_series(files, "mr")
>>>
>>> df = pl.DataFrame({"name": ["render", "monitor"], "path": ["src/MeshRenderer.cpp", "src/Monitor.cpp"]})
>>> fr.rank_dataframe(df, "mr", columns=["name", "path"], limit=1)

See Also
--------
- ``fuzzyrank.expr``: Polars expression namespace for column operations
- ``fuzzyrank.FuzzyIndex``: Prepared candidate set for repeated searches
"""

from typing import List, Optional

import polars as pl

from fuzzyrank.exceptions import ValidationError
from fuzzyrank.options import ScoreFn
from fuzzyrank.sorter import Fuzzysort

_sorter = Fuzzysort()


def rank_series(
    series: "pl.Series",
    query: str,
    limit: Optional[int] = None,
    threshold: Optional[float] = None,
    allow_typo: Optional[bool] = None,
) -> "pl.DataFrame":
    """
    Rank the values of a Series against a query.

    Args:
        series: Series of candidate strings (nulls never match)
        query: The query string
        limit: Keep at most this many rows
        threshold: Drop rows scoring below this
        allow_typo: Allow one adjacent transposition (default True)

    Returns:
        DataFrame with columns idx (position in the Series), target, score,
        sorted best first

    Example:
        >>> rank_series(pl.Series(["Monitor.cpp", "MeshRenderer.cpp"]), "mr")
        shape: (2, 3)
    """
    records = [{"idx": i, "target": value} for i, value in enumerate(series.to_list())]
    results = _sorter.go(
        query,
        records,
        key="target",
        limit=limit,
        threshold=threshold,
        allow_typo=allow_typo,
    )
    return pl.DataFrame(
        {
            "idx": [r.obj["idx"] for r in results],
            "target": [r.target for r in results],
            "score": [r.score for r in results],
        },
        schema={"idx": pl.Int64, "target": pl.Utf8, "score": pl.Int64},
    )


def rank_dataframe(
    df: "pl.DataFrame",
    query: str,
    columns: List[str],
    limit: Optional[int] = None,
    threshold: Optional[float] = None,
    allow_typo: Optional[bool] = None,
    score_fn: Optional[ScoreFn] = None,
    score_column: str = "score",
) -> "pl.DataFrame":
    """
    Rank the rows of a DataFrame by how well their columns match a query.

    Each row is scored on every column in ``columns``; the row score is the
    best column score unless ``score_fn`` says otherwise.

    Args:
        df: DataFrame to rank
        query: The query string
        columns: Columns to match against
        limit: Keep at most this many rows
        threshold: Drop rows scoring below this
        allow_typo: Allow one adjacent transposition (default True)
        score_fn: Reduces the per-column results of a row to one score
        score_column: Name of the added score column

    Returns:
        The matching rows, best first, with a score column appended

    Example:
        >>> rank_dataframe(df, "mr", columns=["name", "path"])
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValidationError(f"Columns not found in DataFrame: {missing}")

    records = list(df.select(columns).iter_rows(named=True))
    # Row number by record identity; any dict key could be a column name
    row_of = {id(record): i for i, record in enumerate(records)}
    results = _sorter.go(
        query,
        records,
        keys=columns,
        limit=limit,
        threshold=threshold,
        allow_typo=allow_typo,
        score_fn=score_fn,
    )
    rows = [row_of[id(r.obj)] for r in results]
    scores = [r.score for r in results]
    ranked = df[rows] if rows else df.clear()
    return ranked.with_columns(pl.Series(score_column, scores, dtype=pl.Float64))
