"""
Shared test fixtures for the question service.

Provides question factories, an in-memory question store, a recording
reply publisher, a mock Redis client, and an async HTTP test client.
"""

import json
import random
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from question_service.matching.emitter import ReplyEmitter
from question_service.matching.handler import MatchRequestHandler
from question_service.matching.selector import CriteriaSelector
from question_service.models.question import Difficulty, Question
from question_service.services.question_store import (
    InMemoryQuestionStore,
    get_question_store,
    set_question_store,
)

REPLY_TOPIC = "question-replies"


# --- Question Factories ---


def _make_question(**overrides) -> Question:
    """Create a Question instance with test defaults via the normal constructor."""
    defaults = {
        "title": "Number of Islands",
        "difficulty": Difficulty.MEDIUM,
        "topics": ["Graphs"],
        "problem_statement": "Count the islands in a grid.",
        "constraints": ["1 <= m, n <= 300"],
        "examples": [{"input": 'grid = [["1"]]', "output": "1"}],
        "entry_point": "num_islands",
        "test_cases": [{"args": [[["1"]]], "expected": 1}],
    }
    defaults.update(overrides)
    return Question(**defaults)


@pytest.fixture
def make_question():
    """Factory fixture for creating Question instances."""
    return _make_question


@pytest.fixture
def graph_questions():
    """Two Medium/Graphs questions plus distractors that must never match."""
    return [
        _make_question(title="Q1"),
        _make_question(title="Q2", topics=["Graphs", "Greedy"]),
        _make_question(title="Hard graph", difficulty=Difficulty.HARD),
        _make_question(title="Medium arrays", topics=["Arrays"]),
    ]


@pytest.fixture
def store(graph_questions):
    return InMemoryQuestionStore(graph_questions, rng=random.Random(1234))


@pytest.fixture(autouse=True)
def reset_store_override():
    yield
    set_question_store(None)


# --- Reply Publisher ---


class RecordingPublisher:
    """Collects published payloads; optionally fails every publish."""

    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, str]] = []
        self.fail = fail

    async def publish(self, topic: str, payload: str) -> None:
        if self.fail:
            raise ConnectionError("bus unavailable")
        self.sent.append((topic, payload))

    def replies(self) -> list[dict]:
        return [json.loads(payload) for topic, payload in self.sent if topic == REPLY_TOPIC]


@pytest.fixture
def make_publisher():
    """Factory fixture for recording publishers."""
    return RecordingPublisher


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def make_handler():
    """Factory fixture wiring a handler to a given store and publisher."""

    def _make(store, publisher):
        return MatchRequestHandler(
            selector=CriteriaSelector(store),
            emitter=ReplyEmitter(publisher, topic=REPLY_TOPIC),
        )

    return _make


@pytest.fixture
def handler(make_handler, store, publisher):
    """Handler wired to the in-memory store and the recording publisher."""
    return make_handler(store, publisher)


# --- Mock Redis ---


@pytest.fixture
def mock_redis():
    """AsyncMock Redis client with the stream commands used by the bus."""
    redis = AsyncMock()
    redis.xadd = AsyncMock(return_value="1-0")
    redis.xack = AsyncMock(return_value=1)
    redis.xreadgroup = AsyncMock(return_value=[])
    redis.xgroup_create = AsyncMock(return_value=True)
    return redis


# --- HTTP Client ---


@pytest_asyncio.fixture
async def client(store):
    """Async HTTP test client with the question store overridden."""
    from question_service.main import app

    app.dependency_overrides[get_question_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Sample Payloads ---


@pytest.fixture
def sample_request():
    """Sample inbound matching request payload."""
    return {
        "correlationId": "abc-1",
        "meta": {"difficulty": "Medium", "topics": ["Graphs"]},
    }
