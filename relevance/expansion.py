# relevance/expansion.py
"""
Semantic interest expansion.

Pure utility: deterministic, no I/O. Every call recomputes from the static
knowledge base; nothing is cached between calls.

expand_interest("food") →
  original + multi-language synonyms (essen, cuisine, cibo, ...)
  + direct related (restaurant, café, bakery, ...)
  + subcategories (vegan, street food, pizza, ...)
  + lexical variants (foods, fod, foood, ...)
  + category extras (gastronomie, kulinarik, gourmet, ...)

Indirect related terms (health, lifestyle, ...) are reported in `related`
but never added to the expanded set.

Similarity (v1):
  1.0  exact match (after normalization)
  0.9  either expansion contains the other raw term
  else jaccard(expansion_a, expansion_b) + graph bonus, capped at 1.0
       graph bonus: +0.30 direct relation, +0.15 indirect relation,
       evaluated in both directions, larger bonus wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from .knowledge_base import (
    CATEGORY_EXTRAS,
    INTEREST_GRAPH,
    KNOWN_TYPOS,
    LANGUAGE_DICTIONARY,
    UMLAUT_PAIRS,
)
from .text import fold_diacritics, normalize_term

logger = logging.getLogger(__name__)

EXACT_SIMILARITY = 1.0
CONTAINS_SIMILARITY = 0.9
DIRECT_GRAPH_BONUS = 0.30
INDIRECT_GRAPH_BONUS = 0.15
MAX_INDIRECT_RELATED = 5


@dataclass(frozen=True)
class InterestExpansion:
    original: str
    expanded: tuple[str, ...]
    languages: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    synonyms: tuple[str, ...] = ()
    subcategories: tuple[str, ...] = ()
    direct_related: tuple[str, ...] = ()
    indirect_related: tuple[str, ...] = ()

    @property
    def related(self) -> tuple[str, ...]:
        return self.direct_related + self.indirect_related

    @property
    def terms(self) -> frozenset[str]:
        return frozenset(self.expanded)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

class _OrderedSet:
    """Insertion-ordered set of lowercase terms (deterministic output)."""

    def __init__(self) -> None:
        self._items: dict[str, None] = {}

    def add(self, term: str) -> None:
        t = term.lower()
        if t not in self._items:
            self._items[t] = None

    def update(self, terms: Iterable[str]) -> None:
        for t in terms:
            self.add(t)

    def __contains__(self, term: str) -> bool:
        return term in self._items

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._items)


def generate_variants(word: str) -> list[str]:
    """Known typos, plural, umlaut substitutions, diacritic folding."""
    variants = _OrderedSet()

    variants.update(KNOWN_TYPOS.get(word, ()))

    if not word.endswith("s"):
        variants.add(word + "s")

    for umlaut, digraph in UMLAUT_PAIRS:
        if umlaut in word:
            variants.add(word.replace(umlaut, digraph))
        if digraph in word:
            variants.add(word.replace(digraph, umlaut))

    folded = fold_diacritics(word)
    if folded != word:
        variants.add(folded)

    return [v for v in variants.as_tuple() if v != word]


def _graph_bonus(a: str, b: str) -> float:
    node = INTEREST_GRAPH.get(a)
    if node is None:
        return 0.0
    if b in node.direct_related:
        return DIRECT_GRAPH_BONUS
    if b in node.indirect_related:
        return INDIRECT_GRAPH_BONUS
    return 0.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def expand_interest(term: str) -> InterestExpansion:
    """
    Expand one raw interest keyword into its term set.

    Unknown terms still expand to {term, plural, ...variants}. An empty term
    expands to the singleton {""}, which never matches downstream.
    """
    norm = normalize_term(term)
    if not norm:
        return InterestExpansion(original=term, expanded=("",))

    expanded = _OrderedSet()
    synonyms = _OrderedSet()
    subcategories = _OrderedSet()
    direct = _OrderedSet()
    indirect = _OrderedSet()
    languages: dict[str, tuple[str, ...]] = {}

    expanded.add(norm)

    lang_dict = LANGUAGE_DICTIONARY.get(norm)
    if lang_dict:
        for lang, words in lang_dict.items():
            languages[lang] = tuple(w.lower() for w in words)
            expanded.update(words)
            synonyms.update(words)

    node = INTEREST_GRAPH.get(norm)
    if node is not None:
        direct.update(node.direct_related)
        expanded.update(node.direct_related)
        subcategories.update(node.subcategories)
        expanded.update(node.subcategories)
        indirect.update(node.indirect_related[:MAX_INDIRECT_RELATED])

    expanded.update(generate_variants(norm))
    expanded.update(CATEGORY_EXTRAS.get(norm, ()))

    result = InterestExpansion(
        original=term,
        expanded=expanded.as_tuple(),
        languages=languages,
        synonyms=synonyms.as_tuple(),
        subcategories=subcategories.as_tuple(),
        direct_related=direct.as_tuple(),
        indirect_related=indirect.as_tuple(),
    )
    logger.debug(
        "[expansion] term=%r expanded=%d subcategories=%d",
        norm, len(result.expanded), len(result.subcategories),
    )
    return result


def expand_all_interests(terms: Iterable[str]) -> list[str]:
    """Union of every term's expansion and subcategories, first-seen order."""
    merged = _OrderedSet()
    for term in terms:
        expansion = expand_interest(term)
        merged.update(t for t in expansion.expanded if t)
        merged.update(expansion.subcategories)
    return list(merged.as_tuple())


def interest_similarity(a: str, b: str) -> float:
    """Symmetric similarity in [0, 1] between two raw interest keywords."""
    na = normalize_term(a)
    nb = normalize_term(b)
    if not na or not nb:
        return 0.0
    if na == nb:
        return EXACT_SIMILARITY

    set_a = expand_interest(na).terms
    set_b = expand_interest(nb).terms

    if nb in set_a or na in set_b:
        return CONTAINS_SIMILARITY

    union = set_a | set_b
    jaccard = len(set_a & set_b) / len(union) if union else 0.0
    bonus = max(_graph_bonus(na, nb), _graph_bonus(nb, na))
    return min(1.0, jaccard + bonus)


def category_of(term: str) -> Optional[str]:
    """
    Knowledge-base category for a raw interest: the term itself when it has
    an entry, else the first category listing it as a synonym or subcategory.
    """
    norm = normalize_term(term)
    if not norm:
        return None
    if norm in INTEREST_GRAPH or norm in LANGUAGE_DICTIONARY:
        return norm
    for category, lang_dict in LANGUAGE_DICTIONARY.items():
        if any(norm in words for words in lang_dict.values()):
            return category
    for category, node in INTEREST_GRAPH.items():
        if norm in node.subcategories:
            return category
    return None


def matches_text(
    text: str,
    interests: Iterable[str],
    threshold: float = 0.3,
) -> tuple[bool, float, list[str]]:
    """
    Containment match of expanded interests in free text.

    Each contained term adds min(1, len(term) / 10) (longer = more specific);
    the sum is normalized by the expanded term count and capped at 1.

    Returns (matches, score, matched_terms).
    """
    text_lower = (text or "").lower()
    expanded = expand_all_interests(interests)
    if not expanded:
        return False, 0.0, []

    score = 0.0
    matched: list[str] = []
    for term in expanded:
        if term in text_lower:
            score += min(1.0, len(term) / 10)
            matched.append(term)

    normalized = min(1.0, score / len(expanded))
    return normalized >= threshold, normalized, matched
