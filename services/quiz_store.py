"""
Quiz session store.

Maps a session key ("{technicalLevel}-{goal}") to its generated QuizQuestionSet.
get_or_create runs check-generate-insert under a per-key lock, so concurrent
requests for one key share a single generation. Failed generations are not cached.

Backends:
  InMemoryQuizStore: process memory, optional TTL (default: none).
  RedisQuizStore   : Redis with TTL and a distributed per-key lock; falls back
                      to an in-memory store when Redis is unreachable.
"""

import asyncio
import logging
import time
import weakref
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import LockError

import clients.redis_client as redis_client
from models.tutor_models import QuizQuestionSet
from utils.exceptions import UpstreamError

logger = logging.getLogger(__name__)

QuizFactory = Callable[[], Awaitable[QuizQuestionSet]]


class QuizStore(ABC):
    backend_name = "abstract"

    @abstractmethod
    async def get(self, key: str) -> Optional[QuizQuestionSet]:
        ...

    @abstractmethod
    async def put(self, key: str, quiz: QuizQuestionSet) -> None:
        ...

    @abstractmethod
    async def invalidate(self, key: str) -> bool:
        """Drop an entry; returns whether one was present."""

    @abstractmethod
    async def get_or_create(self, key: str, factory: QuizFactory) -> QuizQuestionSet:
        ...


class InMemoryQuizStore(QuizStore):
    backend_name = "memory"

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, Tuple[QuizQuestionSet, float]] = {}
        # Locks live only while some request holds or waits on them
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _expired(self, stored_at: float) -> bool:
        return self.ttl_seconds is not None and time.monotonic() - stored_at >= self.ttl_seconds

    async def get(self, key: str) -> Optional[QuizQuestionSet]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        quiz, stored_at = entry
        if self._expired(stored_at):
            self._entries.pop(key, None)
            return None
        return quiz

    async def put(self, key: str, quiz: QuizQuestionSet) -> None:
        self._entries[key] = (quiz, time.monotonic())

    async def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def get_or_create(self, key: str, factory: QuizFactory) -> QuizQuestionSet:
        quiz = await self.get(key)
        if quiz is not None:
            logger.info(f"Quiz cache hit: {key}")
            return quiz

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another request may have finished generating while we waited
            quiz = await self.get(key)
            if quiz is not None:
                logger.info(f"Quiz cache hit after wait: {key}")
                return quiz

            logger.info(f"Quiz cache miss, generating: {key}")
            quiz = await factory()
            await self.put(key, quiz)
            return quiz

    def __len__(self) -> int:
        return len(self._entries)


class RedisQuizStore(QuizStore):
    backend_name = "redis"

    def __init__(self, ttl_seconds: Optional[int] = None, fallback: Optional[InMemoryQuizStore] = None):
        self.ttl_seconds = ttl_seconds
        self.fallback = fallback or InMemoryQuizStore(ttl_seconds=ttl_seconds)
        self._local_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    async def get(self, key: str) -> Optional[QuizQuestionSet]:
        if not await redis_client.is_available():
            return await self.fallback.get(key)
        data = await redis_client.get_quiz(key)
        if data is None:
            return None
        try:
            return QuizQuestionSet(questions=data)
        except PydanticValidationError:
            logger.warning(f"Discarding malformed cached quiz for {key}")
            await redis_client.delete_quiz(key)
            return None

    async def put(self, key: str, quiz: QuizQuestionSet) -> None:
        if not await redis_client.is_available():
            await self.fallback.put(key, quiz)
            return
        stored = await redis_client.set_quiz(key, quiz.as_list(), ttl_seconds=self.ttl_seconds)
        if not stored:
            await self.fallback.put(key, quiz)

    async def invalidate(self, key: str) -> bool:
        if not await redis_client.is_available():
            return await self.fallback.invalidate(key)
        existed = await redis_client.get_quiz(key) is not None
        await redis_client.delete_quiz(key)
        return existed

    async def get_or_create(self, key: str, factory: QuizFactory) -> QuizQuestionSet:
        quiz = await self.get(key)
        if quiz is not None:
            logger.info(f"Quiz cache hit: {key}")
            return quiz

        distributed_lock = await redis_client.quiz_lock(key)
        if distributed_lock is None:
            return await self.fallback.get_or_create(key, factory)

        # Local lock first so one process polls Redis for a key at most once
        local_lock = self._local_locks.setdefault(key, asyncio.Lock())
        async with local_lock:
            acquired = await distributed_lock.acquire()
            if not acquired:
                raise UpstreamError("redis", "Timed out waiting for quiz generation", context={"key": key})
            try:
                quiz = await self.get(key)
                if quiz is not None:
                    logger.info(f"Quiz cache hit after wait: {key}")
                    return quiz

                logger.info(f"Quiz cache miss, generating: {key}")
                quiz = await factory()
                await self.put(key, quiz)
                return quiz
            finally:
                try:
                    await distributed_lock.release()
                except LockError as e:
                    logger.warning(f"Quiz lock for {key} expired before release: {e}")
