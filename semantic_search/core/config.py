import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key, "").strip()
    return float(raw) if raw else default


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    return int(raw) if raw else default


# Embedding API (Gemini embedContent)
EMBEDDING_API_URL = os.getenv(
    "EMBEDDING_API_URL",
    "https://generativelanguage.googleapis.com/v1beta"
)
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "models/text-embedding-004")
EMBEDDING_API_KEY = os.getenv("EMBEDDING_API_KEY", os.getenv("GEMINI_API_KEY", ""))
# None -> the shared HTTP client's default timeout applies
EMBEDDING_TIMEOUT = _env_float("EMBEDDING_TIMEOUT", None)
# 0 -> locked to the length of the first embedding produced
EMBEDDING_DIMENSION = _env_int("EMBEDDING_DIMENSION", 0)

# Database (Supabase PostgREST)
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", os.getenv("SUPABASE_ANON_KEY", ""))
CONTENT_TABLE = os.getenv("CONTENT_TABLE", "contents")
MATCH_FUNCTION = os.getenv("MATCH_FUNCTION", "match_contents")

# Search
SEARCH_TIMEOUT = _env_float("SEARCH_TIMEOUT", 30.0)
DEFAULT_MATCH_THRESHOLD = _env_float("DEFAULT_MATCH_THRESHOLD", 0.6)
DEFAULT_MATCH_COUNT = _env_int("DEFAULT_MATCH_COUNT", 5)

# Server
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 8000)
