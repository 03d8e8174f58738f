"""
Parameter validation tests for fuzzyrank.

Tests cover:
- Option boundary validation (limit, threshold, key/keys, score_fn)
- Type validation (non-string queries)
"""

import pytest

import fuzzyrank as fr


class TestOptionValidation:
    """Tests for option validation."""

    @pytest.mark.parametrize("limit", [0, -1, 1.5, True])
    def test_bad_limit(self, limit):
        with pytest.raises(fr.ValidationError):
            fr.go("a", ["a"], limit=limit)

    @pytest.mark.parametrize("threshold", [float("nan"), "high", False])
    def test_bad_threshold(self, threshold):
        with pytest.raises(fr.ValidationError):
            fr.go("a", ["a"], threshold=threshold)

    def test_infinite_threshold_allowed(self):
        assert len(fr.go("a", ["a"], threshold=float("-inf"))) == 1
        assert fr.go("a", ["a"], threshold=float("inf")) == []

    def test_key_and_keys(self):
        with pytest.raises(fr.ValidationError):
            fr.go("a", [{"k": "a"}], key="k", keys=["k"])

    def test_keys_as_string(self):
        with pytest.raises(fr.ValidationError):
            fr.go("a", [{"k": "a"}], keys="k")

    def test_empty_keys(self):
        with pytest.raises(fr.ValidationError):
            fr.go("a", [{"k": "a"}], keys=[])

    def test_score_fn_not_callable(self):
        with pytest.raises(fr.ValidationError):
            fr.go("a", [{"k": "a"}], keys=["k"], score_fn=42)

    def test_allow_typo_not_bool(self):
        with pytest.raises(fr.ValidationError):
            fr.single("a", "a", allow_typo="yes")

    def test_instance_options_validated(self):
        with pytest.raises(fr.ValidationError):
            fr.new(limit=0)

    def test_unknown_option(self):
        with pytest.raises(fr.ValidationError):
            fr.Options().merged(limt=3)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            fr.go("a", ["a"], limit=-5)

    def test_validated_even_for_empty_input(self):
        with pytest.raises(fr.ValidationError):
            fr.go("", [], limit=0)


class TestTypeValidation:
    """Tests for query type checks."""

    @pytest.mark.parametrize("search", [1, b"ab", ["a"]])
    def test_non_string_query(self, search):
        with pytest.raises(fr.ValidationError):
            fr.single(search, "ab")
        with pytest.raises(fr.ValidationError):
            fr.go(search, ["ab"])

    def test_non_string_targets_use_str(self):
        results = fr.go("12", [123, 45, None])
        assert [r.target for r in results] == ["123"]
