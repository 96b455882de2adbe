# relevance/text.py
"""
Shared text primitives for expansion, scoring and topic matching.

Pure utility: deterministic, no I/O.

Two similarity flavours are used across the engine:
  - string_similarity: substring containment short-circuits to 0.9,
    otherwise 1 - normalized Levenshtein distance. Used by the scorer's
    categorical match.
  - edit_similarity: plain 1 - normalized Levenshtein distance. Used by
    the topic matcher's last resolution step.
"""
from __future__ import annotations

import re
import unicodedata
from typing import Optional

from rapidfuzz.distance import Levenshtein

MIN_TOKEN_LENGTH = 3
CONTAINMENT_SIMILARITY = 0.9

# Letters (incl. umlauts / accented), digits and "_" survive; the rest splits.
_PUNCT_RE = re.compile(r"[^\w\s]", re.UNICODE)
_WS_RE = re.compile(r"\s+")

_UMLAUT_SLUG_MAP = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_term(term: Optional[str]) -> str:
    """Lowercase, trim, collapse whitespace."""
    if not term:
        return ""
    return _WS_RE.sub(" ", term.lower()).strip()


def fold_diacritics(text: str) -> str:
    """Strip combining accents: 'café' -> 'cafe', 'gastronomía' -> 'gastronomia'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(text: str) -> str:
    """URL-friendly slug with German transliteration ('Künstliche KI' -> 'kuenstliche-ki')."""
    s = text.lower()
    for src, dst in _UMLAUT_SLUG_MAP:
        s = s.replace(src, dst)
    s = re.sub(r"[^a-z0-9]+", "-", s)
    return s.strip("-")


def tokenize(text: Optional[str]) -> list[str]:
    """
    Lowercase, replace punctuation with spaces, split on whitespace.
    Tokens shorter than MIN_TOKEN_LENGTH are dropped.
    """
    if not text:
        return []
    s = _PUNCT_RE.sub(" ", text.lower())
    return [tok for tok in s.split() if len(tok) >= MIN_TOKEN_LENGTH]


# ---------------------------------------------------------------------------
# Edit distance
# ---------------------------------------------------------------------------

def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance (insert / delete / substitute, all cost 1)."""
    return Levenshtein.distance(a, b)


def edit_similarity(a: str, b: str) -> float:
    """1 - distance / max_len. Two empty strings are identical (1.0)."""
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a, b)


def string_similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] for categorical matching.

    Empty input never matches (0.0). Containment in either direction
    scores CONTAINMENT_SIMILARITY; otherwise edit similarity.
    """
    if not a or not b:
        return 0.0
    if a in b or b in a:
        return CONTAINMENT_SIMILARITY
    return edit_similarity(a, b)
