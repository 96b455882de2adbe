# relevance/behavior.py
"""
Derive a BehaviorProfile from raw interaction events.

Pure utility: no persistence. Points per interaction are accumulated per
item topic and per item source, then normalized by a ceiling:

  click 1 · read 2 · bookmark 3 · share 5
  weight = min(1.0, points / AFFINITY_CEILING)

e.g. 3 reads (6 pts) + 1 share (5 pts) on 'climate' items → 11/20 = 0.55
"""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Mapping

from .models import BehaviorProfile, ContentItem

AFFINITY_POINTS: dict[str, float] = {
    "click": 1.0,
    "read": 2.0,
    "bookmark": 3.0,
    "share": 5.0,
}

AFFINITY_CEILING: float = 20.0


def normalise_affinity(raw_points: float) -> float:
    return min(1.0, max(0.0, raw_points / AFFINITY_CEILING))


def learn_behavior_profile(
    items: Iterable[ContentItem],
    interactions: Iterable[Mapping[str, str]],
) -> BehaviorProfile:
    """
    Build topic/source affinities from interaction dicts
    ({"item_id": ..., "action": "click" | "read" | "bookmark" | "share"}).

    Interactions on unknown items or with unknown actions are skipped.
    """
    by_id = {item.id: item for item in items}

    topic_points: dict[str, float] = defaultdict(float)
    source_points: dict[str, float] = defaultdict(float)
    bookmarked: set[str] = set()

    for event in interactions:
        item = by_id.get(event.get("item_id", ""))
        points = AFFINITY_POINTS.get((event.get("action") or "").lower())
        if item is None or points is None:
            continue

        for topic in {t.lower().strip() for t in item.topics if t.strip()}:
            topic_points[topic] += points
        if item.source.strip():
            source_points[item.source.lower().strip()] += points
        if event.get("action", "").lower() == "bookmark":
            bookmarked.add(item.id)

    return BehaviorProfile(
        topic_weights={t: normalise_affinity(p) for t, p in sorted(topic_points.items())},
        source_weights={s: normalise_affinity(p) for s, p in sorted(source_points.items())},
        bookmarked_ids=frozenset(bookmarked),
    )
