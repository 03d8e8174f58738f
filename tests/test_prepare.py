"""Tests for query and candidate preprocessing.

Tests cover:
- Case folding into code points
- Word-beginning detection
- The next-beginning lookup table
"""

import pytest

import fuzzyrank as fr
from fuzzyrank.prepare import beginning_indexes, fold_codes, next_beginning_indexes


class TestFoldCodes:
    """Tests for fold_codes."""

    def test_lowercases(self):
        assert fold_codes("AbC") == (97, 98, 99)

    def test_empty_is_none(self):
        assert fold_codes("") is None
        assert fold_codes(None) is None

    def test_length_preserved_for_multichar_lowercase(self):
        """'İ' lowercases to two code points; the fold keeps one code."""
        codes = fold_codes("İx")
        assert len(codes) == 2
        assert codes[1] == ord("x")

    def test_non_ascii_folded(self):
        assert fold_codes("ÄÖ") == (ord("ä"), ord("ö"))


class TestBeginningIndexes:
    """Tests for beginning_indexes."""

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("MeshRenderer.cpp", [0, 4, 12, 13]),
            ("Fuzzy Search", [0, 5, 6]),
            ("abc", [0]),
            ("HTTPServer", [0]),
            ("snake_case_name", [0, 5, 6, 10, 11]),
            ("a1b2", [0]),
        ],
    )
    def test_examples(self, target, expected):
        assert beginning_indexes(target) == expected

    def test_first_char_always_beginning(self):
        assert beginning_indexes("x")[0] == 0
        assert beginning_indexes(".")[0] == 0


class TestNextBeginningIndexes:
    """Tests for next_beginning_indexes."""

    def test_fuzzy_search(self):
        assert next_beginning_indexes("Fuzzy Search") == [5, 5, 5, 5, 5, 6, 12, 12, 12, 12, 12, 12]

    def test_no_further_beginning_is_length(self):
        table = next_beginning_indexes("abc")
        assert table == [3, 3, 3]

    @pytest.mark.parametrize("target", ["MeshRenderer.cpp", "src/fs.py", "a", "A_B_C"])
    def test_shape(self, target):
        table = next_beginning_indexes(target)
        beginnings = beginning_indexes(target)
        assert len(table) == len(target)
        assert table[-1] == len(target)
        for i, nxt in enumerate(table):
            later = [b for b in beginnings if b > i]
            assert nxt == (later[0] if later else len(target))


class TestPrepare:
    """Tests for the public prepare()."""

    def test_prepare(self):
        prepared = fr.prepare("MeshRenderer.cpp")
        assert prepared.target == "MeshRenderer.cpp"
        assert len(prepared.codes) == len("MeshRenderer.cpp")

    def test_prepare_empty(self):
        assert fr.prepare("") is None
        assert fr.prepare(None) is None

    def test_beginning_table_is_lazy_and_kept(self):
        prepared = fr.prepare("Fuzzy Search")
        assert prepared._next_beginnings is None
        table = prepared.next_beginnings
        assert prepared.next_beginnings is table

    def test_prepared_target_can_be_matched(self):
        prepared = fr.prepare("Fuzzy Search")
        assert fr.single("fs", prepared).score == -16
        assert fr.go("fs", [prepared])[0].target == "Fuzzy Search"
