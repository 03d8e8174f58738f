"""Tests for Polars integration."""

import polars as pl
import pytest

import fuzzyrank  # noqa: F401  (registers the .fuzzy namespace)
from fuzzyrank import ValidationError
from fuzzyrank.polars_ext import rank_dataframe, rank_series

FILES = ["MeshRenderer.cpp", "Monitor.cpp", "main.py"]


class TestExprNamespace:
    """Tests for the .fuzzy expression namespace."""

    def test_score(self):
        df = pl.DataFrame({"file": FILES})
        result = df.select(pl.col("file").fuzzy.score("mr"))
        assert result["file"].to_list() == [-18, -6009, None]
        assert result["file"].dtype == pl.Int64

    def test_score_keeps_nulls(self):
        df = pl.DataFrame({"file": ["MeshRenderer.cpp", None]})
        result = df.select(pl.col("file").fuzzy.score("mr"))
        assert result["file"].to_list() == [-18, None]

    def test_score_without_typo(self):
        df = pl.DataFrame({"word": ["test"]})
        assert df.select(pl.col("word").fuzzy.score("tset"))["word"].to_list() == [-20]
        assert df.select(pl.col("word").fuzzy.score("tset", allow_typo=False))["word"].to_list() == [None]

    def test_is_match(self):
        df = pl.DataFrame({"file": FILES})
        result = df.select(pl.col("file").fuzzy.is_match("mr"))
        assert result["file"].to_list() == [True, True, False]

    def test_is_match_threshold(self):
        df = pl.DataFrame({"file": FILES})
        filtered = df.filter(pl.col("file").fuzzy.is_match("mr", threshold=-100))
        assert filtered["file"].to_list() == ["MeshRenderer.cpp"]

    def test_highlight(self):
        df = pl.DataFrame({"file": FILES})
        result = df.select(pl.col("file").fuzzy.highlight("mr"))
        assert result["file"].to_list() == [
            "<b>M</b>esh<b>R</b>enderer.cpp",
            "<b>M</b>onito<b>r</b>.cpp",
            None,
        ]

    def test_highlight_custom_tags(self):
        df = pl.DataFrame({"name": ["Fuzzy Search"]})
        result = df.select(pl.col("name").fuzzy.highlight("fs", "[", "]"))
        assert result["name"].to_list() == ["[F]uzzy [S]earch"]


class TestRankSeries:
    """Tests for rank_series function."""

    def test_basic(self):
        result = rank_series(pl.Series(FILES), "mr")
        assert result.columns == ["idx", "target", "score"]
        assert result["target"].to_list() == ["MeshRenderer.cpp", "Monitor.cpp"]
        assert result["idx"].to_list() == [0, 1]
        assert result["score"].to_list() == [-18, -6009]

    def test_limit(self):
        result = rank_series(pl.Series(FILES), "mr", limit=1)
        assert result["target"].to_list() == ["MeshRenderer.cpp"]

    def test_threshold(self):
        result = rank_series(pl.Series(FILES), "mr", threshold=-100)
        assert len(result) == 1

    def test_nulls_never_match(self):
        result = rank_series(pl.Series([None, "Monitor.cpp"]), "mr")
        assert result["idx"].to_list() == [1]

    def test_no_matches(self):
        result = rank_series(pl.Series(FILES), "zzz")
        assert len(result) == 0
        assert result.schema == {"idx": pl.Int64, "target": pl.Utf8, "score": pl.Int64}

    def test_empty_series(self):
        result = rank_series(pl.Series([], dtype=pl.Utf8), "mr")
        assert len(result) == 0


class TestRankDataFrame:
    """Tests for rank_dataframe function."""

    @pytest.fixture
    def df(self):
        return pl.DataFrame(
            {
                "name": ["render", "monitor", "zzz"],
                "path": ["src/MeshRenderer.cpp", "src/Monitor.cpp", "zzz"],
                "size": [10, 20, 30],
            }
        )

    def test_basic(self, df):
        result = rank_dataframe(df, "mr", columns=["name", "path"])
        assert result["name"].to_list() == ["render", "monitor"]
        assert result["size"].to_list() == [10, 20]
        assert result["score"].to_list() == [-30.0, -6005.0]
        assert result["score"].dtype == pl.Float64

    def test_limit(self, df):
        result = rank_dataframe(df, "mr", columns=["name", "path"], limit=1)
        assert result["name"].to_list() == ["render"]

    def test_score_fn(self, df):
        def path_only(results):
            return results[1].score if results[1] is not None else None

        result = rank_dataframe(df, "zzz", columns=["name", "path"], score_fn=path_only)
        assert result["name"].to_list() == ["zzz"]
        assert result["score"].to_list() == [0.0]

    def test_score_column_name(self, df):
        result = rank_dataframe(df, "mr", columns=["path"], score_column="relevance")
        assert "relevance" in result.columns
        assert "score" not in result.columns

    def test_no_matches(self, df):
        result = rank_dataframe(df, "qqq", columns=["name"])
        assert len(result) == 0
        assert result.columns == ["name", "path", "size", "score"]

    def test_missing_column(self, df):
        with pytest.raises(ValidationError):
            rank_dataframe(df, "mr", columns=["nope"])

    def test_column_names_do_not_clash_with_row_numbers(self):
        df = pl.DataFrame({"_row": ["MeshRenderer", "Monitor"], "idx": [7, 8]})
        result = rank_dataframe(df, "mr", columns=["_row"])
        assert result["_row"].to_list() == ["MeshRenderer", "Monitor"]
        assert result["idx"].to_list() == [7, 8]
