"""
Question store — read access to stored questions.

Two implementations share the ``QuestionStore`` protocol:

  QuestionRepository    — PostgreSQL via async SQLAlchemy; the uniform
                          random pick runs in the database
                          (``ORDER BY random() LIMIT 1`` over the filtered rows)
  InMemoryQuestionStore — a fixed list of questions held in process,
                          used for development and tests

``get_question_store`` returns the configured one.
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import Protocol

from sqlalchemy import func, select

from question_service.config import settings
from question_service.matching.selector import choose_uniform, matches_criteria
from question_service.models.question import Difficulty, Question

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------


class QuestionStore(Protocol):
    async def find_random_match(self, difficulty: str, topic: str) -> Question | None:
        """Return one uniformly chosen question matching the filter, or None."""
        ...

    async def find_by_id(self, question_id: str) -> Question | None:
        ...

    async def find_all(self) -> list[Question]:
        ...


# ---------------------------------------------------------------------------
# PostgreSQL store
# ---------------------------------------------------------------------------


class QuestionRepository:
    """
    Reads questions from PostgreSQL.

    Each call opens its own session from ``session_factory`` so concurrent
    handlers never share one.  Falls back to ``question_service.database.async_session``
    when no factory is supplied.
    """

    def __init__(self, session_factory=None):
        self._session_factory = session_factory

    @property
    def session_factory(self):
        if self._session_factory is not None:
            return self._session_factory
        from question_service.database import async_session
        return async_session

    @staticmethod
    def random_match_statement(difficulty: str, topic: str):
        """Build the filtered, randomly ordered single-row query."""
        return (
            select(Question)
            .where(
                Question.difficulty == difficulty,
                Question.topics.contains([topic]),
            )
            .order_by(func.random())
            .limit(1)
        )

    async def find_random_match(self, difficulty: str, topic: str) -> Question | None:
        async with self.session_factory() as session:
            result = await session.execute(self.random_match_statement(difficulty, topic))
            return result.scalar_one_or_none()

    async def find_by_id(self, question_id: str) -> Question | None:
        try:
            qid = uuid.UUID(str(question_id))
        except ValueError:
            return None
        async with self.session_factory() as session:
            result = await session.execute(select(Question).where(Question.id == qid))
            return result.scalar_one_or_none()

    async def find_all(self) -> list[Question]:
        async with self.session_factory() as session:
            result = await session.execute(select(Question).order_by(Question.title))
            return list(result.scalars().all())


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemoryQuestionStore:
    """Holds a fixed list of questions in process."""

    def __init__(self, questions: list[Question] | None = None, rng: random.Random | None = None):
        self._questions = list(questions or [])
        self._rng = rng

    @classmethod
    def from_dicts(cls, rows: list[dict], rng: random.Random | None = None) -> "InMemoryQuestionStore":
        return cls(
            [Question(**{**row, "difficulty": Difficulty(row["difficulty"])}) for row in rows],
            rng=rng,
        )

    async def find_random_match(self, difficulty: str, topic: str) -> Question | None:
        candidates = [q for q in self._questions if matches_criteria(q, difficulty, topic)]
        return choose_uniform(candidates, self._rng)

    async def find_by_id(self, question_id: str) -> Question | None:
        for question in self._questions:
            if str(question.id) == str(question_id):
                return question
        return None

    async def find_all(self) -> list[Question]:
        return sorted(self._questions, key=lambda q: q.title)


# Module-level store override (for tests)
_store: QuestionStore | None = None


def get_question_store() -> QuestionStore:
    """Return the configured question store."""
    global _store
    if _store is not None:
        return _store
    if settings.QUESTION_STORE_MOCK:
        from question_service.services.sample_questions import SAMPLE_QUESTIONS
        _store = InMemoryQuestionStore.from_dicts(SAMPLE_QUESTIONS)
        logger.info("Using in-memory question store with %d questions", len(SAMPLE_QUESTIONS))
        return _store
    return QuestionRepository()


def set_question_store(store: QuestionStore | None) -> None:
    """Override the question store (for testing)."""
    global _store
    _store = store
