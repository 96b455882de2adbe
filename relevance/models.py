from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class UserLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    radius_km: float = 10.0


class ContentItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    summary: str = ""
    body: Optional[str] = None

    topics: List[str] = Field(default_factory=list)
    tags: Optional[List[str]] = None

    published_at: int                   # epoch millis
    coordinates: Optional[GeoPoint] = None
    locations: List[str] = Field(default_factory=list)

    source: str = ""
    image_url: Optional[str] = None
    url: Optional[str] = None


class BehaviorProfile(BaseModel):
    """Learned affinities; keys are matched case-insensitively."""
    model_config = ConfigDict(frozen=True)

    topic_weights: Dict[str, float] = Field(default_factory=dict)
    source_weights: Dict[str, float] = Field(default_factory=dict)
    bookmarked_ids: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("topic_weights", "source_weights")
    @classmethod
    def _lowercase_keys(cls, v: Dict[str, float]) -> Dict[str, float]:
        return {k.lower().strip(): float(w) for k, w in v.items()}


class ScoreBreakdown(BaseModel):
    """
    Normalized subscores (each in [0, 1]) plus the weighted total.

    `total` is the weighted sum before the proximity boost;
    ScoredItem.score = total * proximity_multiplier.
    """
    lexical: float = 0.0
    topic_match: float = 0.0
    tag_match: float = 0.0
    recency: float = 0.0
    quality: float = 0.0
    geographic: float = 0.0
    behavioral: float = 0.0

    total: float = 0.0
    proximity_multiplier: int = 1
    distance_km: Optional[float] = None


class ScoredItem(BaseModel):
    item: ContentItem
    score: float
    breakdown: ScoreBreakdown
    matched_terms: List[str] = Field(default_factory=list)
    reason: str = ""


class TopicRegistryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str


class ExtractedEntities(BaseModel):
    topics: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    identifiers: List[str] = Field(default_factory=list)
    unmatched: List[str] = Field(default_factory=list)
    confidence: float = 0.0
