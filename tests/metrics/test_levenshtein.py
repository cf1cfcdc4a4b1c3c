"""Tests for the numpy edit distance used by the duplication metric."""

import pytest

from quality_lens.metrics import levenshtein, similarity


class TestLevenshtein:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
            ("a", "b", 1),
            ("intention", "execution", 5),
        ],
    )
    def test_known_distances(self, a, b, expected):
        assert levenshtein(a, b) == expected

    def test_symmetric(self):
        assert levenshtein("saturday", "sunday") == levenshtein("sunday", "saturday") == 3

    def test_non_ascii(self):
        assert levenshtein("naïve", "naive") == 1


class TestSimilarity:
    def test_identical(self):
        assert similarity("abc", "abc") == 1.0

    def test_empty_is_zero(self):
        assert similarity("", "abc") == 0.0
        assert similarity("", "") == 0.0

    def test_normalised_by_longest(self):
        assert similarity("kitten", "sitting") == pytest.approx(4 / 7)
