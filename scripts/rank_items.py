#!/usr/bin/env python3
# scripts/rank_items.py
"""
Rank a JSON file of content items against a set of interests.

Read-only: loads items, scores them, prints the ranking and a summary.

Input: a JSON array of objects shaped like relevance.models.ContentItem
(id, title, summary, topics, tags, published_at in epoch millis, ...).

Usage:
  python -m scripts.rank_items --items items.json --interest food --interest tech
  python -m scripts.rank_items --items items.json --interest food \
      --lat 47.37 --lng 8.54 --radius-km 5 --limit 10
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional

from pydantic import ValidationError


def load_items(path: str) -> list[Any]:
    from relevance.models import ContentItem

    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of items")
    return [ContentItem.model_validate(r) for r in raw]


def rank(
    items: list[Any],
    interests: list[str],
    *,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius_km: float = 10.0,
    now_ms: Optional[int] = None,
    limit: Optional[int] = None,
) -> dict[str, Any]:
    """
    Score items and return a JSON-serialisable report.

    Kept free of argv/file handling so tests can call it directly.
    """
    from relevance.models import UserLocation
    from relevance.scoring import score_items
    from relevance.telemetry import ScoreTelemetry

    location = None
    if lat is not None and lng is not None:
        location = UserLocation(lat=lat, lng=lng, radius_km=radius_km)

    telemetry = ScoreTelemetry()
    ranked = score_items(items, interests, location, now_ms=now_ms, telemetry=telemetry)
    if limit is not None:
        ranked = ranked[:limit]

    return {
        "results": [
            {
                "id": s.item.id,
                "title": s.item.title,
                "score": round(s.score, 4),
                "total": round(s.breakdown.total, 4),
                "multiplier": s.breakdown.proximity_multiplier,
                "matched_terms": s.matched_terms,
                "reason": s.reason,
            }
            for s in ranked
        ],
        "telemetry": telemetry.as_json(),
    }


def main(argv: Optional[list[str]] = None) -> int:
    from relevance import config

    parser = argparse.ArgumentParser(description="Rank content items against interests.")
    parser.add_argument("--items", required=True, help="Path to a JSON array of items.")
    parser.add_argument("--interest", action="append", default=[], help="Interest keyword (repeatable).")
    parser.add_argument("--lat", type=float, default=None)
    parser.add_argument("--lng", type=float, default=None)
    parser.add_argument("--radius-km", type=float, default=10.0)
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--now-ms", type=int, default=None, help="Pin the clock (epoch millis).")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

    try:
        items = load_items(args.items)
    except (OSError, ValueError, ValidationError) as e:
        print(f"[rank] ERROR loading {args.items}: {e}", file=sys.stderr)
        return 1

    report = rank(
        items,
        args.interest,
        lat=args.lat,
        lng=args.lng,
        radius_km=args.radius_km,
        now_ms=args.now_ms,
        limit=args.limit,
    )

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
        return 0

    for pos, row in enumerate(report["results"], start=1):
        boost = f" x{row['multiplier']}" if row["multiplier"] > 1 else ""
        print(f"{pos:>3}. {row['score']:.4f}{boost}  {row['id']}  {row['title'][:60]}")
        print(f"       {row['reason']}")

    t = report["telemetry"]
    print(
        f"[rank][summary]"
        f" items={t['count']}"
        f" shown={len(report['results'])}"
        f" interests={len(args.interest)}"
        f" hist={t['hist']}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
