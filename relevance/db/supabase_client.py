from __future__ import annotations

from supabase import create_client, Client

from relevance import config


def get_supabase_client() -> Client:
    missing = config.missing_supabase_settings()
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Copy .env.example to .env and fill in your Supabase credentials."
        )
    return create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)
