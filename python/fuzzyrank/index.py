"""FuzzyIndex for repeated ranking against a fixed candidate set.

This module provides a high-level interface for preparing candidates once,
from Polars Series or Python lists, and then ranking many queries against
them without paying preprocessing cost again.

Warning:
    This class is NOT thread-safe for construction or loading. Searching a
    fully built index from several threads is fine.
"""

import pickle
from pathlib import Path
from typing import List, Optional, Union

import polars as pl

from fuzzyrank.models import Results
from fuzzyrank.prepare import prepare_target
from fuzzyrank.sorter import Fuzzysort


class FuzzyIndex:
    """
    A reusable set of prepared candidates.

    Every item is prepared up front, including its word-beginning table, so
    searches only run the matcher. Items that are empty or None are kept in
    position (so ``match_idx`` lines up with the input) but never match.

    Warning:
        This class is NOT thread-safe for construction. Create separate
        instances per thread if you build indices concurrently.

    Example:
        >>> import polars as pl
        >>> from fuzzyrank import FuzzyIndex
        >>>
        >>> files = pl.Series(["MeshRenderer.cpp", "Monitor.cpp", "main.py"])
        >>> index = FuzzyIndex.from_series(files)
        >>> [r.target for r in index.search("mr")]
        ['MeshRenderer.cpp', 'Monitor.cpp']
        >>>
        >>> index.save("files_index.pkl")
        >>> index = FuzzyIndex.load("files_index.pkl")
    """

    def __init__(self, items: List[str], allow_typo: bool = True):
        """
        Create a FuzzyIndex from a list of strings.

        Args:
            items: Candidate strings to index
            allow_typo: Default typo tolerance for searches
        """
        self._items = items
        self._allow_typo = allow_typo
        self._sorter = Fuzzysort(allow_typo=allow_typo)
        self._prepared = self._build_index()

    def _build_index(self):
        """Prepare every item and its beginning table."""
        return [prepare_target(item, eager=True) for item in self._items]

    @classmethod
    def from_series(cls, series: "pl.Series", allow_typo: bool = True) -> "FuzzyIndex":
        """
        Create a FuzzyIndex from a Polars Series.

        Args:
            series: Polars Series of strings to index
            allow_typo: Default typo tolerance for searches

        Returns:
            FuzzyIndex instance
        """
        items = [str(x) if x is not None else "" for x in series.to_list()]
        return cls(items, allow_typo=allow_typo)

    @classmethod
    def from_dataframe(cls, df: "pl.DataFrame", column: str, allow_typo: bool = True) -> "FuzzyIndex":
        """
        Create a FuzzyIndex from a DataFrame column.

        Args:
            df: Polars DataFrame
            column: Column name to index
            allow_typo: Default typo tolerance for searches

        Returns:
            FuzzyIndex instance
        """
        return cls.from_series(df[column], allow_typo=allow_typo)

    def search(
        self,
        query: str,
        limit: Optional[int] = 10,
        threshold: Optional[float] = None,
        allow_typo: Optional[bool] = None,
    ) -> Results:
        """
        Rank the indexed items against a query.

        Args:
            query: Query string
            limit: Maximum number of results (None for all matches)
            threshold: Drop results scoring below this
            allow_typo: Override the index's typo tolerance

        Returns:
            Results, best first; each Result's ``obj`` is the item's position
            in the index.
        """
        records = [{"idx": i, "target": p} for i, p in enumerate(self._prepared) if p is not None]
        results = self._sorter.go(
            query,
            records,
            key="target",
            limit=limit,
            threshold=threshold,
            allow_typo=allow_typo,
        )
        for r in results:
            r.obj = r.obj["idx"]
        return results

    def search_series(
        self,
        queries: "pl.Series",
        limit: Optional[int] = 1,
        threshold: Optional[float] = None,
        include_query: bool = True,
    ) -> "pl.DataFrame":
        """
        Search for each query in a Series, returning a DataFrame of results.

        Args:
            queries: Series of query strings
            limit: Maximum matches per query (default: 1 for best match only)
            threshold: Drop results scoring below this
            include_query: Include query column in results

        Returns:
            DataFrame with columns:
            - query_idx: Index of the query in the input Series
            - query: The query string (if include_query=True)
            - match: The matched item
            - match_idx: Index of the match in the indexed items
            - score: Match score (<= 0, higher is better)
        """
        rows = []
        for query_idx, query in enumerate(queries.to_list()):
            if query is None:
                continue

            for match in self.search(str(query), limit=limit, threshold=threshold):
                row = {
                    "query_idx": query_idx,
                    "match": match.target,
                    "match_idx": match.obj,
                    "score": match.score,
                }
                if include_query:
                    row["query"] = str(query)
                rows.append(row)

        if not rows:
            schema = {"query_idx": pl.Int64, "match": pl.Utf8, "match_idx": pl.Int64, "score": pl.Int64}
            if include_query:
                schema["query"] = pl.Utf8
            return pl.DataFrame(schema=schema)

        df = pl.DataFrame(rows)
        if include_query:
            return df.select(["query_idx", "query", "match", "match_idx", "score"])
        return df.select(["query_idx", "match", "match_idx", "score"])

    def batch_search(
        self,
        queries: List[str],
        limit: Optional[int] = 1,
        threshold: Optional[float] = None,
    ) -> List[Results]:
        """Search for multiple queries, returning one Results per query."""
        return [self.search(q, limit=limit, threshold=threshold) for q in queries]

    def get_items(self) -> List[str]:
        """Return the list of indexed items."""
        return self._items.copy()

    def __len__(self) -> int:
        """Return the number of indexed items."""
        return len(self._items)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the index to a file.

        Only the raw items and settings are stored; preparation is redone on
        load.

        Args:
            path: File path to save to (typically .pkl extension)
        """
        data = {
            "items": self._items,
            "allow_typo": self._allow_typo,
        }
        with open(path, "wb") as f:
            pickle.dump(data, f)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "FuzzyIndex":
        """
        Load an index from a file.

        Args:
            path: File path to load from

        Returns:
            FuzzyIndex instance
        """
        with open(path, "rb") as f:
            data = pickle.load(f)

        return cls(items=data["items"], allow_typo=data["allow_typo"])

    def __repr__(self) -> str:
        return f"FuzzyIndex(allow_typo={self._allow_typo!r}, size={len(self._items)})"
