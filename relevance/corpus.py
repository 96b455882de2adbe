# relevance/corpus.py
"""
Corpus statistics for TF-IDF over one candidate set.

Built fresh per scoring call from exactly the items being scored;
never shared across calls with a different candidate set.

  idf(term) = ln((N + 1) / (df + 1))      df of an unseen term counts as 1
"""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .models import ContentItem
from .text import tokenize


@dataclass(frozen=True)
class CorpusStatistics:
    size: int
    document_frequency: Mapping[str, int] = field(default_factory=dict)

    def df(self, term: str) -> int:
        return self.document_frequency.get(term, 0)

    def idf(self, term: str) -> float:
        df = self.document_frequency.get(term) or 1
        return math.log((self.size + 1) / (df + 1))

    @property
    def vocabulary_size(self) -> int:
        return len(self.document_frequency)


def item_text(item: ContentItem) -> str:
    """Title, summary, topics, tags and locations as one lowercase blob."""
    parts = [item.title, item.summary, *item.topics, *(item.tags or []), *item.locations]
    return " ".join(p for p in parts if p).lower()


def build_corpus_statistics(items: Iterable[ContentItem]) -> CorpusStatistics:
    """Count, per unique token, how many items contain it at least once."""
    doc_freq: Counter[str] = Counter()
    size = 0
    for item in items:
        size += 1
        doc_freq.update(set(tokenize(item_text(item))))
    return CorpusStatistics(size=size, document_frequency=dict(doc_freq))
