"""
Async Redis client for quiz session caching.
Provides get/set/delete/lock operations with graceful fallback on Redis failure.
"""

import json
import asyncio
import logging
from typing import List, Optional

from utils import config

logger = logging.getLogger(__name__)

_redis_client = None
_redis_available = None
_redis_lock = asyncio.Lock()

QUIZ_KEY_PREFIX = "quiz"
QUIZ_LOCK_PREFIX = "quiz-lock"


async def _get_redis():
    """Lazy-init async Redis connection singleton with lock to prevent race conditions."""
    global _redis_client, _redis_available
    if _redis_available is False:
        return None
    if _redis_client is not None:
        return _redis_client
    async with _redis_lock:
        # Double-check after acquiring lock
        if _redis_client is not None:
            return _redis_client
        if _redis_available is False:
            return None
        try:
            import redis.asyncio as aioredis
            url = config.REDIS_URL
            _redis_client = aioredis.from_url(url, decode_responses=True)
            await _redis_client.ping()
            _redis_available = True
            logger.info(f"Redis connected: {url}")
            return _redis_client
        except Exception as e:
            logger.warning(f"Redis unavailable, quiz sessions will stay in process memory: {e}")
            _redis_available = False
            _redis_client = None
            return None


def _quiz_key(session_key: str) -> str:
    return f"{QUIZ_KEY_PREFIX}:{session_key}"


async def get_quiz(session_key: str) -> Optional[List[str]]:
    """Get cached questions. Returns None on miss or Redis failure."""
    try:
        r = await _get_redis()
        if r is None:
            return None
        raw = await r.get(_quiz_key(session_key))
        if not raw:
            return None
        return json.loads(raw)
    except Exception as e:
        logger.warning(f"Redis get_quiz failed: {e}")
        return None


async def set_quiz(session_key: str, questions: List[str], ttl_seconds: Optional[int] = None) -> bool:
    """Store questions under the session key with a TTL."""
    try:
        r = await _get_redis()
        if r is None:
            return False
        await r.set(
            _quiz_key(session_key),
            json.dumps(questions),
            ex=ttl_seconds or config.QUIZ_TTL_SECONDS,
        )
        return True
    except Exception as e:
        logger.warning(f"Redis set_quiz failed: {e}")
        return False


async def delete_quiz(session_key: str) -> bool:
    """Drop a cached quiz."""
    try:
        r = await _get_redis()
        if r is None:
            return False
        await r.delete(_quiz_key(session_key))
        return True
    except Exception as e:
        logger.warning(f"Redis delete_quiz failed: {e}")
        return False


async def quiz_lock(session_key: str, timeout_seconds: Optional[int] = None):
    """
    Distributed lock guarding generation for one session key.
    Returns None when Redis is unavailable; callers then lock in-process.
    """
    r = await _get_redis()
    if r is None:
        return None
    timeout = timeout_seconds or config.QUIZ_LOCK_TIMEOUT_SECONDS
    return r.lock(
        f"{QUIZ_LOCK_PREFIX}:{session_key}",
        timeout=timeout,
        blocking_timeout=timeout,
    )


async def is_available() -> bool:
    return await _get_redis() is not None
