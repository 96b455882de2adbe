import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")

TOPIC_REGISTRY_TABLE = os.getenv("TOPIC_REGISTRY_TABLE", "topics")
TOPIC_CACHE_TTL_SECONDS = float(os.getenv("TOPIC_CACHE_TTL_SECONDS", "300"))
TOPIC_REGISTRY_TIMEOUT_SECONDS = float(os.getenv("TOPIC_REGISTRY_TIMEOUT_SECONDS", "1.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def missing_supabase_settings() -> list[str]:
    """Names of required Supabase variables that are unset."""
    missing = []
    if not SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")
    return missing
