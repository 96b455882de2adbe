# tests/test_text_similarity.py
"""
Shared text primitives (relevance/text.py):
  - normalization, diacritic folding, slugs
  - tokenization rules (punctuation, min length 3)
  - Levenshtein distance and the two similarity flavours
"""
from __future__ import annotations

import pytest

from relevance.text import (
    edit_similarity,
    fold_diacritics,
    levenshtein_distance,
    normalize_term,
    slugify,
    string_similarity,
    tokenize,
)


class TestNormalization:

    def test_normalize_term_lowercases_trims_and_collapses(self):
        assert normalize_term("  Street   Food ") == "street food"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_normalize_term_empty(self, value):
        assert normalize_term(value) == ""

    def test_fold_diacritics(self):
        assert fold_diacritics("café") == "cafe"
        assert fold_diacritics("gastronomía") == "gastronomia"
        assert fold_diacritics("plain") == "plain"

    @pytest.mark.parametrize("text,expected", [
        ("AI", "ai"),
        ("Künstliche Intelligenz!", "kuenstliche-intelligenz"),
        ("Straße & Grün", "strasse-gruen"),
        ("  --Climate Change--  ", "climate-change"),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestTokenize:

    def test_strips_punctuation_and_short_tokens(self):
        assert tokenize("Hello, world! AI is here — café-bar") == [
            "hello", "world", "here", "café", "bar",
        ]

    def test_keeps_umlauts(self):
        assert tokenize("Küche und Bäckerei") == ["küche", "und", "bäckerei"]

    def test_keeps_repetitions(self):
        assert tokenize("tech tech TECH") == ["tech", "tech", "tech"]

    @pytest.mark.parametrize("text", [None, "", "a b c", "!!!"])
    def test_nothing_left(self, text):
        assert tokenize(text) == []


class TestLevenshtein:

    @pytest.mark.parametrize("a,b,expected", [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("politics", "politcs", 1),
        ("flaw", "lawn", 2),
    ])
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    def test_distance_is_symmetric(self):
        assert levenshtein_distance("restaurant", "resturant") == levenshtein_distance("resturant", "restaurant")

    def test_edit_similarity_of_two_empty_strings(self):
        assert edit_similarity("", "") == 1.0

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("café", "cafe"),
        ("", "abc"),
        ("klima", "climate"),
        ("restaurant", "resturant"),
    ])
    def test_edit_similarity_agrees_with_distance(self, a, b):
        expected = 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))
        assert edit_similarity(a, b) == pytest.approx(expected)

    def test_edit_similarity_normalizes_by_longest(self):
        assert edit_similarity("abc", "abd") == pytest.approx(2 / 3)
        assert edit_similarity("politics", "politcs") == pytest.approx(0.875)


class TestStringSimilarity:

    def test_containment_scores_point_nine(self):
        assert string_similarity("tech", "technology") == 0.9
        assert string_similarity("technology", "tech") == 0.9

    def test_identical_counts_as_containment(self):
        assert string_similarity("ai", "ai") == 0.9

    def test_falls_back_to_edit_similarity(self):
        assert string_similarity("food", "fool") == pytest.approx(0.75)

    @pytest.mark.parametrize("a,b", [("", "food"), ("food", ""), ("", "")])
    def test_empty_never_matches(self, a, b):
        assert string_similarity(a, b) == 0.0

    def test_range(self):
        for a, b in [("music", "museum"), ("bar", "barbecue"), ("x", "yz")]:
            assert 0.0 <= string_similarity(a, b) <= 1.0
