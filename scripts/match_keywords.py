#!/usr/bin/env python3
# scripts/match_keywords.py
"""
Resolve keywords to canonical topic identifiers.

Reads the topic registry from Supabase (SUPABASE_URL +
SUPABASE_SERVICE_ROLE_KEY in .env or shell) unless --offline is given,
in which case only the built-in default topics are used.

Usage:
  python -m scripts.match_keywords "machine learning" klima "quantum physics"
  python -m scripts.match_keywords --offline ai tech
"""
from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Optional


def match_keywords(keywords: list[str], registry: Any = None) -> dict[str, Any]:
    """
    Resolve each keyword and the batch as a whole.

    The registry is passed in (not created here) so tests can inject a fake.
    """
    from relevance.models import ExtractedEntities
    from relevance.topics.matcher import CanonicalTopicMatcher

    with CanonicalTopicMatcher(registry) as matcher:
        per_keyword = {kw: matcher.match_keyword(kw) for kw in keywords}
        batch = matcher.match_batch(ExtractedEntities(topics=keywords))
        snapshot = matcher.snapshot()

    return {
        "keywords": per_keyword,
        "batch": batch.model_dump(),
        "registry_topics": len(snapshot.title_index),
        "fallback": snapshot.is_fallback,
    }


def main(argv: Optional[list[str]] = None) -> int:
    from relevance import config

    parser = argparse.ArgumentParser(description="Resolve keywords to canonical topic ids.")
    parser.add_argument("keywords", nargs="+")
    parser.add_argument("--offline", action="store_true", help="Skip the registry; use default topics.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

    registry = None
    if not args.offline:
        from relevance.db.topic_registry import SupabaseTopicRegistry

        try:
            registry = SupabaseTopicRegistry.from_env()
        except RuntimeError as e:
            print(f"[match] ERROR: {e}")
            return 1

    report = match_keywords(args.keywords, registry)
    print(json.dumps(report, indent=2, ensure_ascii=False))
    print(
        f"[match][summary] keywords={len(args.keywords)}"
        f" matched={len(args.keywords) - len(report['batch']['unmatched'])}"
        f" fallback={report['fallback']}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
