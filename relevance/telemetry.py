# relevance/telemetry.py
"""
Score telemetry for one ranking run. Observability only: never affects ranking.

Pre-boost totals land in five equal-width buckets over [0, 1]
("0_20" ... "80_100", 1.0 counts as "80_100"), globally and per item
source; items are also counted per proximity multiplier tier.
"""
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Sequence

BUCKET_KEYS: tuple[str, ...] = ("0_20", "20_40", "40_60", "60_80", "80_100")


def bucket_key(total: float) -> str:
    clamped = min(max(total, 0.0), 1.0)
    return BUCKET_KEYS[min(int(clamped * len(BUCKET_KEYS)), len(BUCKET_KEYS) - 1)]


def histogram(totals: Sequence[float]) -> dict[str, int]:
    counts = Counter(bucket_key(t) for t in totals)
    return {k: counts.get(k, 0) for k in BUCKET_KEYS}


def _summary(totals: Sequence[float]) -> dict[str, Any]:
    return {
        "count": len(totals),
        "min": min(totals) if totals else None,
        "avg": sum(totals) / len(totals) if totals else None,
        "max": max(totals) if totals else None,
        "hist": histogram(totals),
    }


@dataclass
class ScoreTelemetry:
    """Feed it from the collecting thread only."""
    totals_by_source: dict[str, list[float]] = field(default_factory=lambda: defaultdict(list))
    multiplier_counts: Counter = field(default_factory=Counter)

    def add(self, source: str, total: float, multiplier: int = 1) -> None:
        self.totals_by_source[source or "unknown"].append(total)
        self.multiplier_counts[multiplier] += 1

    @property
    def boosted(self) -> int:
        return sum(n for m, n in self.multiplier_counts.items() if m > 1)

    def as_json(self) -> dict[str, Any]:
        everything = [t for totals in self.totals_by_source.values() for t in totals]
        out = _summary(everything)
        out["multipliers"] = {str(m): n for m, n in sorted(self.multiplier_counts.items())}
        out["sources"] = {name: _summary(totals) for name, totals in sorted(self.totals_by_source.items())}
        return out
