"""
Process-wide service instances, built on first use.
Routes depend on the get_* functions so tests can override them.
"""

import logging
from functools import lru_cache

from clients.llm_client import LanguageModel, OpenAIEmbedder
from services.analysis_service import AnalysisService
from services.chat_service import ChatService
from services.quiz_service import QuizService
from services.quiz_store import InMemoryQuizStore, QuizStore, RedisQuizStore
from services.retrieval_service import PineconeVectorIndex, RetrievalService
from services.study_plan_service import StudyPlanService
from utils import config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_language_model() -> LanguageModel:
    return LanguageModel(config.TUTOR_MODEL)


@lru_cache(maxsize=1)
def get_retrieval_service() -> RetrievalService:
    return RetrievalService(
        embedder=OpenAIEmbedder(config.EMBEDDING_MODEL),
        vector_index=PineconeVectorIndex(config.PINECONE_INDEX_NAME, config.PINECONE_NAMESPACE),
    )


@lru_cache(maxsize=1)
def get_quiz_store() -> QuizStore:
    if config.QUIZ_STORE_BACKEND == "redis":
        logger.info(f"Quiz sessions stored in Redis (ttl={config.QUIZ_TTL_SECONDS}s)")
        return RedisQuizStore(ttl_seconds=config.QUIZ_TTL_SECONDS)
    if config.QUIZ_STORE_BACKEND != "memory":
        raise ValueError(f"Unknown QUIZ_STORE_BACKEND: {config.QUIZ_STORE_BACKEND}")
    logger.info("Quiz sessions stored in process memory")
    return InMemoryQuizStore()


@lru_cache(maxsize=1)
def get_quiz_service() -> QuizService:
    return QuizService(get_quiz_store(), get_retrieval_service(), get_language_model())


@lru_cache(maxsize=1)
def get_analysis_service() -> AnalysisService:
    return AnalysisService(get_language_model())


@lru_cache(maxsize=1)
def get_study_plan_service() -> StudyPlanService:
    return StudyPlanService(get_language_model())


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    return ChatService(get_retrieval_service(), get_language_model())
