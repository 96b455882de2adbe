# tests/test_semantic_expansion.py
"""
Semantic interest expansion (relevance/expansion.py):
  - multi-language + graph expansion of known interests
  - variants for unknown terms (plural, umlauts, diacritics)
  - symmetric interest similarity with graph bonuses
  - category lookup and free-text containment matching
"""
from __future__ import annotations

import itertools

import pytest

from relevance.expansion import (
    category_of,
    expand_all_interests,
    expand_interest,
    generate_variants,
    interest_similarity,
    matches_text,
)


class TestExpandInterest:

    def test_food_pulls_languages_related_and_subcategories(self):
        exp = expand_interest("food")
        for term in ("food", "essen", "cibo", "restaurant", "vegan", "street food", "foods", "fod", "gourmet"):
            assert term in exp.expanded
        assert set(exp.languages) == {"de", "en", "fr", "it", "es"}
        assert "pizza" in exp.subcategories
        assert "restaurant" in exp.direct_related

    def test_indirect_related_reported_but_not_expanded(self):
        exp = expand_interest("food")
        assert "health" in exp.indirect_related
        assert "health" in exp.related
        assert "health" not in exp.expanded
        assert len(exp.indirect_related) <= 5

    def test_normalizes_input(self):
        assert expand_interest(" FOOD ").expanded == expand_interest("food").expanded

    def test_expansion_has_no_duplicates(self):
        exp = expand_interest("café")
        assert len(exp.expanded) == len(set(exp.expanded))
        assert "cafe" in exp.expanded
        assert "coffee" in exp.expanded

    def test_unknown_term_gets_plural_only(self):
        exp = expand_interest("quidditch")
        assert exp.expanded == ("quidditch", "quidditchs")
        assert exp.languages == {}
        assert exp.related == ()

    def test_unknown_term_ending_in_s_has_no_plural(self):
        assert expand_interest("chess").expanded == ("chess",)

    @pytest.mark.parametrize("term", ["", "   "])
    def test_empty_term_expands_to_empty_singleton(self, term):
        assert expand_interest(term).expanded == ("",)

    def test_deterministic(self):
        assert expand_interest("tech") == expand_interest("tech")


class TestVariants:

    def test_umlaut_to_digraph_and_back(self):
        assert "muesli" in generate_variants("müsli")
        assert "müsli" in generate_variants("muesli")

    def test_diacritic_fold(self):
        assert "gastronomia" in generate_variants("gastronomía")

    def test_known_typos_first(self):
        assert generate_variants("tech")[:3] == ["tec", "techy", "techno"]

    def test_never_contains_the_word_itself(self):
        assert "food" not in generate_variants("food")


class TestExpandAll:

    def test_union_without_duplicates(self):
        merged = expand_all_interests(["food", "tech"])
        assert len(merged) == len(set(merged))
        assert "essen" in merged and "startup" in merged
        assert merged[0] == "food"

    def test_skips_empty_terms(self):
        merged = expand_all_interests(["", "tech"])
        assert "" not in merged
        assert "tech" in merged

    def test_empty_input(self):
        assert expand_all_interests([]) == []


_SIM_TERMS = ["food", "restaurant", "café", "bar", "tech", "community", "health", "culture", "music", "quidditch"]


class TestInterestSimilarity:

    def test_exact_match(self):
        assert interest_similarity("food", "food") == 1.0
        assert interest_similarity("Food", " food ") == 1.0

    def test_contained_in_expansion(self):
        assert interest_similarity("food", "restaurant") == 0.9
        assert interest_similarity("food", "vegan") == 0.9
        assert interest_similarity("vegan", "food") == 0.9

    def test_indirect_relation_gets_bonus(self):
        sim = interest_similarity("health", "food")
        assert 0.15 <= sim < 0.9

    def test_unrelated_unknown_terms(self):
        assert interest_similarity("quidditch", "chess") == 0.0

    @pytest.mark.parametrize("a,b", [("", "food"), ("food", ""), ("  ", "")])
    def test_empty_is_zero(self, a, b):
        assert interest_similarity(a, b) == 0.0

    @pytest.mark.parametrize("a,b", list(itertools.combinations(_SIM_TERMS, 2)))
    def test_symmetric_and_bounded(self, a, b):
        ab = interest_similarity(a, b)
        assert ab == interest_similarity(b, a)
        assert 0.0 <= ab <= 1.0


class TestCategoryOf:

    @pytest.mark.parametrize("term,expected", [
        ("food", "food"),
        ("Tech", "tech"),
        ("essen", "food"),
        ("vegan", "food"),
        ("kultur", "culture"),
        ("quidditch", None),
        ("", None),
    ])
    def test_lookup(self, term, expected):
        assert category_of(term) == expected


class TestMatchesText:

    def test_collects_contained_terms(self):
        ok, score, matched = matches_text("New vegan restaurant opens downtown", ["food"], threshold=0.0)
        assert ok is True
        assert "vegan" in matched
        assert "restaurant" in matched
        assert 0.0 < score <= 1.0

    def test_default_threshold_needs_many_terms(self):
        ok, score, _ = matches_text("vegan", ["food"])
        assert ok is False
        assert score < 0.3

    def test_no_interests(self):
        assert matches_text("anything", []) == (False, 0.0, [])

    def test_case_insensitive(self):
        _, _, matched = matches_text("STREET FOOD festival", ["food"])
        assert "street food" in matched
