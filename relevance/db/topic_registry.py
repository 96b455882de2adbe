from __future__ import annotations

from typing import Any, Dict, Protocol

from relevance import config

PAGE_SIZE = 1000


class TopicRegistry(Protocol):
    """Anything that can enumerate the external title → identifier mapping."""

    def fetch_titles(self) -> Dict[str, str]:
        ...


class SupabaseTopicRegistry:
    """
    Topic registry backed by a Supabase table.

    Reads `id,title` rows from the configured table (default public.topics).
    Expected schema:
      - id (text, canonical topic identifier)
      - title (text, display title, unique case-insensitively)

    May return a partial or empty mapping; the matcher decides what to do
    with that. Transport / PostgREST errors propagate to the caller.
    """

    def __init__(self, client: Any, table: str = "topics") -> None:
        self.client = client
        self.table = table

    @classmethod
    def from_env(cls) -> "SupabaseTopicRegistry":
        from relevance.db.supabase_client import get_supabase_client

        return cls(get_supabase_client(), config.TOPIC_REGISTRY_TABLE)

    def fetch_titles(self) -> Dict[str, str]:
        titles: Dict[str, str] = {}
        offset = 0

        while True:
            resp = (
                self.client.table(self.table)
                .select("id,title")
                .order("title", desc=False)
                .range(offset, offset + PAGE_SIZE - 1)
                .execute()
            )
            rows: Any = getattr(resp, "data", None) or []

            for r in rows:
                topic_id = str(r.get("id") or "").strip()
                title = str(r.get("title") or "").strip()
                # never fail the refresh because of malformed rows
                if not topic_id or not title:
                    continue
                titles.setdefault(title, topic_id)

            if len(rows) < PAGE_SIZE:
                break
            offset += PAGE_SIZE

        return titles
