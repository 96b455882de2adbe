# tests/test_behavior_profile.py
from __future__ import annotations

import pytest

from relevance.behavior import AFFINITY_CEILING, learn_behavior_profile, normalise_affinity
from relevance.models import BehaviorProfile, ContentItem


def _items() -> list[ContentItem]:
    return [
        ContentItem(id="i1", title="Heat wave", topics=["Climate", "Energy"], source="Reuters", published_at=0),
        ContentItem(id="i2", title="Glaciers", topics=["climate"], source="BBC", published_at=0),
    ]


def test_normalise_affinity_clamps():
    assert normalise_affinity(0) == 0.0
    assert normalise_affinity(AFFINITY_CEILING / 2) == 0.5
    assert normalise_affinity(AFFINITY_CEILING * 3) == 1.0
    assert normalise_affinity(-4) == 0.0


def test_learns_topic_and_source_weights():
    profile = learn_behavior_profile(_items(), [
        {"item_id": "i1", "action": "read"},
        {"item_id": "i2", "action": "share"},
        {"item_id": "i1", "action": "bookmark"},
    ])

    # climate: 2 + 5 + 3 = 10 points, energy: 2 + 3 = 5 points
    assert profile.topic_weights == {"climate": 0.5, "energy": 0.25}
    assert profile.source_weights == {"bbc": 0.25, "reuters": 0.25}
    assert profile.bookmarked_ids == frozenset({"i1"})


def test_skips_unknown_items_and_actions():
    profile = learn_behavior_profile(_items(), [
        {"item_id": "missing", "action": "read"},
        {"item_id": "i1", "action": "like"},
        {"item_id": "i1"},
    ])
    assert profile.topic_weights == {}
    assert profile.source_weights == {}
    assert profile.bookmarked_ids == frozenset()


def test_weights_saturate_at_one():
    profile = learn_behavior_profile(_items(), [{"item_id": "i2", "action": "share"}] * 5)
    assert profile.topic_weights["climate"] == 1.0


def test_action_names_are_case_insensitive():
    profile = learn_behavior_profile(_items(), [{"item_id": "i1", "action": "BOOKMARK"}])
    assert profile.bookmarked_ids == frozenset({"i1"})
    assert profile.topic_weights["climate"] == pytest.approx(3 / AFFINITY_CEILING)


def test_profile_keys_are_lowercased():
    profile = BehaviorProfile(topic_weights={" Climate ": 1}, source_weights={"Reuters": 0.5})
    assert profile.topic_weights == {"climate": 1.0}
    assert profile.source_weights == {"reuters": 0.5}
