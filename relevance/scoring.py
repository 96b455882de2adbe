# relevance/scoring.py
"""
Composite relevance scoring for content items against a user profile.

Pure computation: no I/O, no DB access. Deterministic once `now_ms` is
pinned; same inputs always produce the same ranking.

Formula (v1), every subscore normalized to [0, 1] before weighting:
  lexical     0.40  TF-IDF of expanded interest terms in the item text,
                    summed, averaged by interest count, clamped
  topic_match 0.15  fuzzy (expanded interest, topic) pairs:
                    sim > 0.8 → 1, > 0.5 → 0.5, > 0.3 → 0.25
  tag_match   0.10  same ladder without the 0.25 step
  recency     0.15  exp(-age_hours / 24), +0.3 if tagged 'breaking'
  quality     0.10  structural richness bonuses (+ category ladders)
  geographic  0.05  1 - distance / radius inside the radius, else 0
  behavioral  0.05  learned topic/source affinities + bookmark bonus

  total = Σ weight × subscore
  score = total × proximity multiplier (x10 < 100 m, x5 < 250 m, x2 < 500 m)

The multiplier is applied last and reported separately so callers can
tell "inherently relevant" from "boosted by proximity".
"""
from __future__ import annotations

import logging
import math
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, Mapping, Optional

from .corpus import CorpusStatistics, build_corpus_statistics, item_text
from .expansion import category_of, expand_all_interests
from .geo import haversine, linear_decay, proximity_multiplier
from .knowledge_base import CATEGORY_EXTRAS, INTEREST_GRAPH
from .models import (
    BehaviorProfile,
    ContentItem,
    ScoreBreakdown,
    ScoredItem,
    UserLocation,
)
from .telemetry import ScoreTelemetry
from .text import normalize_term, string_similarity, tokenize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scoring rules (v1)
# ---------------------------------------------------------------------------

LEXICAL_WEIGHT = 0.40
TOPIC_WEIGHT = 0.15
TAG_WEIGHT = 0.10
RECENCY_WEIGHT = 0.15
QUALITY_WEIGHT = 0.10
GEO_WEIGHT = 0.05
BEHAVIOR_WEIGHT = 0.05

RECENCY_DECAY_HOURS = 24.0
BREAKING_TAG = "breaking"
BREAKING_BONUS = 0.3

# (threshold_exclusive, points); first satisfied step wins.
TOPIC_POINT_LADDER: tuple[tuple[float, float], ...] = ((0.8, 1.0), (0.5, 0.5), (0.3, 0.25))
TAG_POINT_LADDER: tuple[tuple[float, float], ...] = ((0.8, 1.0), (0.5, 0.5))

REPUTABLE_SOURCES: frozenset[str] = frozenset({"reuters", "ap", "bbc", "guardian", "nytimes"})
LONG_BODY_CHARS = 500
LONG_SUMMARY_CHARS = 150

BEHAVIOR_TOPIC_FACTOR = 0.4
BEHAVIOR_SOURCE_FACTOR = 0.3
BOOKMARK_BONUS = 0.3

MAX_EXPLAINED_TERMS = 5

_MS_PER_HOUR = 3_600_000


def _clamp(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


# ---------------------------------------------------------------------------
# Per-call context (read-only, shared across workers)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringContext:
    interests: tuple[str, ...]
    expanded_terms: tuple[str, ...]
    term_tokens: Mapping[str, tuple[str, ...]]
    query_tokens: frozenset[str]
    categories: frozenset[str]
    corpus: CorpusStatistics
    now_ms: int
    location: Optional[UserLocation] = None
    behavior: Optional[BehaviorProfile] = None

    @property
    def interest_count(self) -> int:
        return len(self.interests)


def build_context(
    items: list[ContentItem],
    interests: Iterable[str],
    location: Optional[UserLocation] = None,
    behavior: Optional[BehaviorProfile] = None,
    *,
    now_ms: Optional[int] = None,
) -> ScoringContext:
    """Expand interests and index the candidate set once per call."""
    raw = tuple(t for t in (normalize_term(i) for i in interests) if t)
    expanded = tuple(expand_all_interests(raw))
    term_tokens = {term: tuple(tokenize(term)) for term in expanded}
    query_tokens = frozenset(tok for toks in term_tokens.values() for tok in toks)
    categories = frozenset(c for c in (category_of(i) for i in raw) if c)

    return ScoringContext(
        interests=raw,
        expanded_terms=expanded,
        term_tokens=term_tokens,
        query_tokens=query_tokens,
        categories=categories,
        corpus=build_corpus_statistics(items),
        now_ms=int(time.time() * 1000) if now_ms is None else now_ms,
        location=location,
        behavior=behavior,
    )


# ---------------------------------------------------------------------------
# Subscores
# ---------------------------------------------------------------------------

def score_lexical(item: ContentItem, ctx: ScoringContext) -> tuple[float, list[str]]:
    """
    TF-IDF of the expanded query tokens in the item text.

    Returns (subscore, explained terms). Explained terms are the expanded
    terms present in the text, highest TF-IDF contribution first.
    """
    if ctx.interest_count == 0:
        return 0.0, []

    words = tokenize(item_text(item))
    if not words:
        return 0.0, []

    freq = Counter(words)
    n_words = len(words)

    token_tf: dict[str, float] = {}
    token_score: dict[str, float] = {}
    for tok in ctx.query_tokens:
        count = freq.get(tok)
        if not count:
            continue
        tf = count / n_words
        token_tf[tok] = tf
        token_score[tok] = tf * ctx.corpus.idf(tok)

    if not token_tf:
        return 0.0, []

    raw_score = sum(token_score.values())

    contributions: list[tuple[float, float, int, str]] = []
    for pos, term in enumerate(ctx.expanded_terms):
        toks = ctx.term_tokens.get(term, ())
        if not toks or not all(t in token_tf for t in toks):
            continue
        contributions.append((
            sum(token_score[t] for t in toks),
            sum(token_tf[t] for t in toks),
            pos,
            term,
        ))
    # highest contribution, then highest tf, then expansion order
    contributions.sort(key=lambda c: (-c[0], -c[1], c[2]))
    explained = [c[3] for c in contributions[:MAX_EXPLAINED_TERMS]]

    return _clamp(raw_score / ctx.interest_count), explained


def _categorical_points(
    labels: Iterable[str],
    terms: Iterable[str],
    ladder: tuple[tuple[float, float], ...],
) -> float:
    normalized = [normalize_term(lbl) for lbl in labels]
    normalized = [lbl for lbl in normalized if lbl]
    if not normalized:
        return 0.0

    points = 0.0
    for term in terms:
        for label in normalized:
            sim = string_similarity(term, label)
            for threshold, award in ladder:
                if sim > threshold:
                    points += award
                    break
    return points


def score_topic_match(item: ContentItem, ctx: ScoringContext) -> float:
    if ctx.interest_count == 0:
        return 0.0
    points = _categorical_points(item.topics, ctx.expanded_terms, TOPIC_POINT_LADDER)
    return _clamp(points / ctx.interest_count)


def score_tag_match(item: ContentItem, ctx: ScoringContext) -> float:
    if ctx.interest_count == 0 or not item.tags:
        return 0.0
    points = _categorical_points(item.tags, ctx.expanded_terms, TAG_POINT_LADDER)
    return _clamp(points / ctx.interest_count)


def score_recency(item: ContentItem, now_ms: int) -> float:
    """exp(-age/24h); future-dated items count as brand new."""
    age_hours = max(0.0, (now_ms - item.published_at) / _MS_PER_HOUR)
    score = math.exp(-age_hours / RECENCY_DECAY_HOURS)
    if any(normalize_term(t) == BREAKING_TAG for t in (item.tags or [])):
        score += BREAKING_BONUS
    return _clamp(score)


# --- category quality ladders ---

_FOOD_TERMS: frozenset[str] = frozenset(
    INTEREST_GRAPH["food"].subcategories
    + INTEREST_GRAPH["food"].direct_related
    + CATEGORY_EXTRAS["food"]
)
_DIETARY_TERMS: frozenset[str] = frozenset({"vegan", "vegetarian", "bio", "organic"})


def _words(text: str) -> list[str]:
    """Punctuation-insensitive split that keeps short words ('bio', 'bbq')."""
    return "".join(ch if ch.isalnum() or ch.isspace() else " " for ch in text).split()


def _mentions(padded_text: str, terms: Iterable[str]) -> bool:
    return any(f" {t} " in padded_text for t in terms)


def _food_ladder(item: ContentItem, padded_text: str) -> float:
    """
    +0.10  mentions a food subcategory / venue term
    +0.05  mentions a dietary term (vegan, vegetarian, bio, organic)
    +0.05  food item with an image
    """
    if not _mentions(padded_text, _FOOD_TERMS):
        return 0.0
    bonus = 0.10
    if _mentions(padded_text, _DIETARY_TERMS):
        bonus += 0.05
    if item.image_url:
        bonus += 0.05
    return bonus


QUALITY_LADDERS: Mapping[str, Callable[[ContentItem, str], float]] = {
    "food": _food_ladder,
}


def score_quality(item: ContentItem, categories: Iterable[str] = ()) -> float:
    """
    Structural richness:
      +0.20  image
      +0.15  coordinates
      +0.15  body longer than 500 chars
      +0.10  any tags
      +0.15  more than one topic
      +0.15  summary longer than 150 chars
      +0.10  reputable source
    plus category ladders for the user's interest categories; clamped to 1.
    """
    score = 0.0
    if item.image_url:
        score += 0.20
    if item.coordinates is not None:
        score += 0.15
    if item.body and len(item.body) > LONG_BODY_CHARS:
        score += 0.15
    if item.tags:
        score += 0.10
    if len(item.topics) > 1:
        score += 0.15
    if len(item.summary) > LONG_SUMMARY_CHARS:
        score += 0.15
    if item.source.strip().lower() in REPUTABLE_SOURCES:
        score += 0.10

    ladders = [QUALITY_LADDERS[c] for c in sorted(set(categories)) if c in QUALITY_LADDERS]
    if ladders:
        text = item_text(item)
        if item.body:
            text = f"{text} {item.body.lower()}"
        padded = " " + " ".join(_words(text)) + " "
        for ladder in ladders:
            score += ladder(item, padded)

    return _clamp(score)


def score_geographic(
    item: ContentItem,
    location: Optional[UserLocation],
) -> tuple[float, Optional[float]]:
    """Returns (subscore, distance_km); both absent without location or coordinates."""
    if location is None or item.coordinates is None:
        return 0.0, None
    distance = haversine(location.lat, location.lng, item.coordinates.lat, item.coordinates.lng)
    return linear_decay(distance, location.radius_km), distance


def score_behavior(item: ContentItem, behavior: Optional[BehaviorProfile]) -> float:
    if behavior is None:
        return 0.0
    score = 0.0
    for topic in item.topics:
        score += behavior.topic_weights.get(topic.lower().strip(), 0.0) * BEHAVIOR_TOPIC_FACTOR
    score += behavior.source_weights.get(item.source.lower().strip(), 0.0) * BEHAVIOR_SOURCE_FACTOR
    if item.id in behavior.bookmarked_ids:
        score += BOOKMARK_BONUS
    return _clamp(score)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def weighted_contributions(breakdown: ScoreBreakdown) -> dict[str, float]:
    """Per-signal contribution to `total` (subscore × weight)."""
    return {
        "lexical": breakdown.lexical * LEXICAL_WEIGHT,
        "topic_match": breakdown.topic_match * TOPIC_WEIGHT,
        "tag_match": breakdown.tag_match * TAG_WEIGHT,
        "recency": breakdown.recency * RECENCY_WEIGHT,
        "quality": breakdown.quality * QUALITY_WEIGHT,
        "geographic": breakdown.geographic * GEO_WEIGHT,
        "behavioral": breakdown.behavioral * BEHAVIOR_WEIGHT,
    }


def explain(breakdown: ScoreBreakdown, matched_terms: list[str], bookmarked: bool) -> str:
    """Short human-readable reason for the UI."""
    reasons: list[str] = []
    if matched_terms:
        reasons.append("Matches " + ", ".join(matched_terms))
    elif breakdown.topic_match >= 0.5 or breakdown.tag_match >= 0.5:
        reasons.append("Topics fit your interests")
    if breakdown.recency >= 0.7:
        reasons.append("Published recently")
    if breakdown.distance_km is not None:
        if breakdown.proximity_multiplier > 1:
            reasons.append(f"{round(breakdown.distance_km * 1000)} m away")
        elif breakdown.geographic > 0:
            reasons.append(f"{breakdown.distance_km:.1f} km away")
    if bookmarked:
        reasons.append("In your bookmarks")
    if not reasons:
        return "Ranked by freshness and quality"
    return "; ".join(reasons)


def score_item(item: ContentItem, ctx: ScoringContext) -> ScoredItem:
    lexical, matched_terms = score_lexical(item, ctx)
    topic_match = score_topic_match(item, ctx)
    tag_match = score_tag_match(item, ctx)
    recency = score_recency(item, ctx.now_ms)
    quality = score_quality(item, ctx.categories)
    geographic, distance = score_geographic(item, ctx.location)
    behavioral = score_behavior(item, ctx.behavior)

    total = 0.0
    total += LEXICAL_WEIGHT * lexical
    total += TOPIC_WEIGHT * topic_match
    total += TAG_WEIGHT * tag_match
    total += RECENCY_WEIGHT * recency
    total += QUALITY_WEIGHT * quality
    total += GEO_WEIGHT * geographic
    total += BEHAVIOR_WEIGHT * behavioral

    multiplier = proximity_multiplier(distance) if distance is not None else 1

    breakdown = ScoreBreakdown(
        lexical=lexical,
        topic_match=topic_match,
        tag_match=tag_match,
        recency=recency,
        quality=quality,
        geographic=geographic,
        behavioral=behavioral,
        total=total,
        proximity_multiplier=multiplier,
        distance_km=distance,
    )

    bookmarked = ctx.behavior is not None and item.id in ctx.behavior.bookmarked_ids
    return ScoredItem(
        item=item,
        score=total * multiplier,
        breakdown=breakdown,
        matched_terms=matched_terms,
        reason=explain(breakdown, matched_terms, bookmarked),
    )


def score_items(
    items: Iterable[ContentItem],
    interests: Iterable[str],
    location: Optional[UserLocation] = None,
    behavior: Optional[BehaviorProfile] = None,
    *,
    now_ms: Optional[int] = None,
    workers: Optional[int] = None,
    telemetry: Optional[ScoreTelemetry] = None,
) -> list[ScoredItem]:
    """
    Score and rank `items`, highest score first.

    Ties keep input order (stable sort). An empty candidate set returns [].
    With `workers > 1`, items are scored on a thread pool sharing the
    read-only context built once up front.
    """
    candidates = list(items)
    if not candidates:
        return []

    ctx = build_context(candidates, interests, location, behavior, now_ms=now_ms)

    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            scored = list(pool.map(partial(score_item, ctx=ctx), candidates))
    else:
        scored = [score_item(item, ctx) for item in candidates]

    if telemetry is not None:
        for s in scored:
            telemetry.add(s.item.source, s.breakdown.total, s.breakdown.proximity_multiplier)

    ranked = sorted(scored, key=lambda s: s.score, reverse=True)

    logger.info(
        "[scoring][summary] items=%d interests=%d expanded_terms=%d vocab=%d boosted=%d",
        ctx.corpus.size,
        ctx.interest_count,
        len(ctx.expanded_terms),
        ctx.corpus.vocabulary_size,
        sum(1 for s in scored if s.breakdown.proximity_multiplier > 1),
    )
    return ranked
