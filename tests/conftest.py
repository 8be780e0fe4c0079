"""
Shared fixtures: in-process fakes for the model, embedder and vector index,
and a TestClient whose service dependencies are wired to those fakes.
"""

import json
import os
import sys

import pytest

# Add repo root to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from main import app
from services.analysis_service import AnalysisService
from services.chat_service import ChatService
from services.container import (
    get_analysis_service,
    get_chat_service,
    get_quiz_service,
    get_quiz_store,
    get_study_plan_service,
)
from services.quiz_service import QuizService
from services.quiz_store import InMemoryQuizStore
from services.retrieval_service import RetrievalService
from services.study_plan_service import StudyPlanService


QUESTIONS = [
    "What is the most important task a data scientist performs, and why does it matter for a business?",
    "Given a dataset of 1000 rows where some ages are negative, how would you clean and analyze it?",
    "Compare supervised and unsupervised learning and walk through one algorithm of each step by step.",
]
QUIZ_JSON = json.dumps(QUESTIONS)


class FakeLanguageModel:
    """Returns queued completions; an Exception in the queue is raised instead."""

    def __init__(self, responses=None, stream_chunks=None):
        self.responses = list(responses or [])
        self.stream_chunks = list(stream_chunks or [])
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        response = self.responses.pop(0) if self.responses else None
        if isinstance(response, Exception):
            raise response
        return response

    async def stream(self, messages):
        self.calls.append(messages)
        for chunk in self.stream_chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk


class FakeEmbedder:
    def __init__(self):
        self.calls = []

    async def embed(self, text):
        self.calls.append(text)
        return [0.1, 0.2, 0.3]


class FakeVectorIndex:
    def __init__(self, hits=None):
        self.hits = hits if hits is not None else [
            {"id": "m1", "score": 0.91, "metadata": {"content": "Data scientists clean data."}},
            {"id": "m2", "score": 0.84, "metadata": {"content": "Supervised learning uses labels."}},
            {"id": "m3", "score": 0.80, "metadata": {}},
        ]
        self.calls = []

    async def query(self, vector, top_k):
        self.calls.append((vector, top_k))
        return self.hits[:top_k]


@pytest.fixture
def fake_llm():
    return FakeLanguageModel()


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_index():
    return FakeVectorIndex()


@pytest.fixture
def retrieval(fake_embedder, fake_index):
    return RetrievalService(fake_embedder, fake_index)


@pytest.fixture
def quiz_store():
    return InMemoryQuizStore()


@pytest.fixture
def quiz_service(quiz_store, retrieval, fake_llm):
    return QuizService(quiz_store, retrieval, fake_llm)


@pytest.fixture
def chat_service(retrieval, fake_llm):
    return ChatService(retrieval, fake_llm, dedupe=False)


def _make_client(quiz_service, chat_service, fake_llm, raise_server_exceptions=True):
    app.dependency_overrides[get_quiz_service] = lambda: quiz_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_analysis_service] = lambda: AnalysisService(fake_llm)
    app.dependency_overrides[get_study_plan_service] = lambda: StudyPlanService(fake_llm)
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture
def client(quiz_service, chat_service, fake_llm):
    with _make_client(quiz_service, chat_service, fake_llm) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(quiz_service, chat_service, fake_llm):
    """Client that turns unhandled server errors into 500 responses instead of raising."""
    with _make_client(quiz_service, chat_service, fake_llm, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_store_singleton():
    get_quiz_store.cache_clear()
    yield
    get_quiz_store.cache_clear()
