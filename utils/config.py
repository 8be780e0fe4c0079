"""
Environment-driven settings for the tutor service.
Values are read once at import; a .env file in the working directory is honoured.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


# API credentials
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
PINECONE_API_KEY = os.getenv("PINECONE_API_KEY")

# Vector index
PINECONE_INDEX_NAME = os.getenv("PINECONE_INDEX_NAME", "code-a-palooza")
PINECONE_NAMESPACE = os.getenv("PINECONE_NAMESPACE", "ns1")

# Models
TUTOR_MODEL = os.getenv("TUTOR_MODEL")  # key into MODEL_CONFIGS; None → DEFAULT_MODEL
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
LLM_TIMEOUT_SECONDS = _env_int("LLM_TIMEOUT_SECONDS", 60)

# Quiz session store
QUIZ_STORE_BACKEND = os.getenv("QUIZ_STORE_BACKEND", "memory").strip().lower()
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
QUIZ_TTL_SECONDS = _env_int("QUIZ_TTL_SECONDS", 86400)  # 24 hours
QUIZ_LOCK_TIMEOUT_SECONDS = _env_int("QUIZ_LOCK_TIMEOUT_SECONDS", 120)

# Chat
CHAT_DEDUPE_LINES = _env_bool("CHAT_DEDUPE_LINES", False)

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
