# relevance/topics/matcher.py
"""
Canonical topic matching: free-text keyword → registry topic identifier.

Resolution order (first hit wins):
  1. exact title match (case-insensitive)
  2. synonym table → canonical label → its identifier
     (synthesized as 'topic-<slug>' when the label is not in the registry)
  3. substring containment against every cached title, either direction
  4. edit similarity > 0.7 against every cached title

Cache model:
  - The title index lives in an immutable TopicSnapshot. Refresh builds a
    new snapshot and swaps the reference; readers never lock.
  - A snapshot older than the TTL (default 5 min) is refreshed on the next
    call. The registry read is bounded by a timeout (default 1 s).
  - Registry returns nothing → the fixed default topic set is installed.
  - Registry fails or times out → the last good snapshot stays (defaults if
    there is none yet) and the next refresh is attempted after the TTL.
  - Nothing here raises to the caller on registry trouble.
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Mapping, Optional

from postgrest.exceptions import APIError

from relevance import config
from relevance.db.topic_registry import TopicRegistry
from relevance.models import ExtractedEntities, MatchResult, TopicRegistryEntry
from relevance.text import edit_similarity, normalize_term, slugify

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Static tables
# ---------------------------------------------------------------------------

DEFAULT_TOPICS: tuple[str, ...] = (
    "AI", "Technology", "Climate", "Politics", "Economy",
    "Health", "Sports", "Science", "Culture", "Education",
)

SYNONYMS: dict[str, tuple[str, ...]] = {
    "ai": ("artificial intelligence", "künstliche intelligenz", "ki", "machine learning", "ml"),
    "technology": ("tech", "technologie", "digital", "innovation"),
    "climate": ("klima", "environment", "umwelt", "sustainability"),
    "politics": ("politik", "government", "regierung"),
    "economy": ("wirtschaft", "business", "finance", "finanzen"),
    "health": ("gesundheit", "medical", "medizin"),
    "sports": ("sport",),
    "science": ("wissenschaft", "research", "forschung"),
    "culture": ("kultur", "art", "kunst"),
    "education": ("bildung", "learning", "lernen"),
}

EDIT_SIMILARITY_THRESHOLD = 0.7
MAX_BATCH_KEYWORDS = 5


def create_topic_id(title: str) -> str:
    return f"topic-{slugify(title)}"


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TopicSnapshot:
    title_index: Mapping[str, str]                 # normalized title → id
    topics: Mapping[str, TopicRegistryEntry] = field(default_factory=dict)
    loaded_at: float = 0.0
    is_fallback: bool = False


def build_snapshot(
    titles: Mapping[str, str],
    loaded_at: float,
    *,
    is_fallback: bool = False,
) -> TopicSnapshot:
    index: Dict[str, str] = {}
    topics: Dict[str, TopicRegistryEntry] = {}
    for title, topic_id in titles.items():
        key = normalize_term(title)
        if not key or not topic_id or key in index:
            continue
        index[key] = topic_id
        topics[topic_id] = TopicRegistryEntry(id=topic_id, title=title.strip(), slug=slugify(title))
    return TopicSnapshot(title_index=index, topics=topics, loaded_at=loaded_at, is_fallback=is_fallback)


def default_snapshot(loaded_at: float) -> TopicSnapshot:
    return build_snapshot(
        {title: create_topic_id(title) for title in DEFAULT_TOPICS},
        loaded_at,
        is_fallback=True,
    )


def resolve_keyword(keyword: str, snapshot: TopicSnapshot) -> Optional[str]:
    """Pure resolution against one snapshot; None when nothing matches."""
    norm = normalize_term(keyword)
    if not norm:
        return None
    index = snapshot.title_index

    # 1. exact
    if norm in index:
        return index[norm]

    # 2. synonyms
    for canonical, synonyms in SYNONYMS.items():
        if norm in synonyms:
            return index.get(canonical) or create_topic_id(canonical)

    # 3. containment
    for title, topic_id in index.items():
        if title in norm or norm in title:
            return topic_id

    # 4. edit similarity
    for title, topic_id in index.items():
        if edit_similarity(norm, title) > EDIT_SIMILARITY_THRESHOLD:
            return topic_id

    return None


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------

class CanonicalTopicMatcher:
    """
    Read-through cache over an external topic registry.

    Safe to share between threads: reads go through a single snapshot
    reference; only refreshes are serialized.
    """

    def __init__(
        self,
        registry: Optional[TopicRegistry] = None,
        *,
        ttl_seconds: float = config.TOPIC_CACHE_TTL_SECONDS,
        timeout_seconds: float = config.TOPIC_REGISTRY_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._registry = registry
        self._ttl = ttl_seconds
        self._timeout = timeout_seconds
        self._clock = clock

        self._snapshot: Optional[TopicSnapshot] = None
        self._refresh_lock = threading.Lock()
        self._inflight: Optional[Future] = None

    def __enter__(self) -> "CanonicalTopicMatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- cache ---

    def _is_fresh(self, snapshot: Optional[TopicSnapshot], now: float) -> bool:
        return snapshot is not None and (now - snapshot.loaded_at) <= self._ttl

    @staticmethod
    def _run_fetch(registry: TopicRegistry, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(registry.fetch_titles())
        except Exception as e:
            future.set_exception(e)

    def _fetch_titles(self) -> Optional[Dict[str, str]]:
        """Registry read bounded by the timeout. None means 'failed'."""
        if self._registry is None:
            return {}

        if self._inflight is not None and not self._inflight.done():
            logger.warning("[topics] previous registry read still running, skipping refresh")
            return None

        # Daemon thread: a hung read must never hold up interpreter exit.
        future: Future = Future()
        worker = threading.Thread(
            target=self._run_fetch,
            args=(self._registry, future),
            name="topic-registry",
            daemon=True,
        )
        self._inflight = future
        worker.start()
        try:
            return dict(future.result(timeout=self._timeout))
        except FuturesTimeoutError:
            logger.warning("[topics] registry read timed out after %.1fs", self._timeout)
        except APIError as e:
            logger.warning("[topics] registry read failed: %s", getattr(e, "message", None) or e)
        except Exception as e:
            logger.warning("[topics] registry read failed: %s: %s", type(e).__name__, e)
        return None

    def refresh(self, *, force: bool = False) -> TopicSnapshot:
        """Fetch the registry and swap in a new snapshot (if stale or forced)."""
        with self._refresh_lock:
            current = self._snapshot
            now = self._clock()
            if not force and self._is_fresh(current, now):
                return current

            titles = self._fetch_titles()
            if titles is None:
                if current is not None:
                    new = replace(current, loaded_at=now)
                else:
                    new = default_snapshot(now)
                    logger.warning("[topics] no cached topics, using %d defaults", len(DEFAULT_TOPICS))
            elif not titles:
                new = default_snapshot(now)
                logger.warning("[topics] registry returned 0 topics, using %d defaults", len(DEFAULT_TOPICS))
            else:
                new = build_snapshot(titles, now)
                logger.info("[topics] loaded %d topics from registry", len(new.title_index))

            self._snapshot = new
            return new

    def snapshot(self) -> TopicSnapshot:
        current = self._snapshot
        if self._is_fresh(current, self._clock()):
            return current
        return self.refresh()

    def cached_topics(self) -> list[TopicRegistryEntry]:
        current = self._snapshot
        return list(current.topics.values()) if current is not None else []

    def clear_cache(self) -> None:
        self._snapshot = None

    def close(self) -> None:
        """Forget any read still in flight; its daemon thread is left to finish or die with the process."""
        self._inflight = None

    # --- matching ---

    def match_keyword(self, keyword: str) -> Optional[str]:
        return resolve_keyword(keyword, self.snapshot())

    def match_batch(self, entities: ExtractedEntities) -> MatchResult:
        """
        Resolve every extracted topic plus the first MAX_BATCH_KEYWORDS
        keywords. Identifiers are unique, in first-match order.

        confidence = resolved attempts / attempts (0 when nothing attempted)
        """
        snapshot = self.snapshot()
        attempts = list(entities.topics) + list(entities.keywords[:MAX_BATCH_KEYWORDS])

        identifiers: Dict[str, None] = {}
        unmatched: list[str] = []
        resolved = 0
        for term in attempts:
            topic_id = resolve_keyword(term, snapshot)
            if topic_id is None:
                unmatched.append(term)
                continue
            resolved += 1
            identifiers.setdefault(topic_id, None)

        confidence = resolved / len(attempts) if attempts else 0.0
        return MatchResult(
            identifiers=list(identifiers),
            unmatched=unmatched,
            confidence=confidence,
        )
