"""
Criteria selection — turns a (difficulty, topic) filter into one question.

Matching rules:
  - difficulty must equal the requested value exactly
  - the question's topic list must contain the requested topic
  - among all matches each question is equally likely to be chosen

The random pick itself is done by the store (``find_random_match``) so
the SQL store can push it into the database. ``choose_uniform`` and
``matches_criteria`` are the in-process equivalents used by the
in-memory store.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any, Sequence, TypeVar

from question_service.matching.errors import InvalidCriteriaError
from question_service.models.question import Difficulty, Question, Topic

if TYPE_CHECKING:
    from question_service.services.question_store import QuestionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DIFFICULTIES = [d.value for d in Difficulty]
TOPICS = [t.value for t in Topic]


def validate_criteria(difficulty: Any, topics: Sequence[Any] | str) -> tuple[Difficulty, Topic]:
    """
    Check the requested difficulty and first topic against the known values.

    *topics* may be a single label (HTTP query) or an ordered list
    (bus request); only the first list entry is honoured.

    Raises:
        InvalidCriteriaError: with a message suitable for the caller.
    """
    if difficulty not in DIFFICULTIES:
        raise InvalidCriteriaError(f"Invalid difficulty level: {difficulty}")
    topic = topics if isinstance(topics, str) else (topics[0] if topics else None)
    if topic is None or topic == "":
        raise InvalidCriteriaError("At least one topic must be specified")
    if topic not in TOPICS:
        raise InvalidCriteriaError(f"Invalid topic: {topic}")
    return Difficulty(difficulty), Topic(topic)


def matches_criteria(question: Question, difficulty: str, topic: str) -> bool:
    """Return True if *question* has exactly *difficulty* and lists *topic*."""
    return question.difficulty == difficulty and question.has_topic(topic)


def choose_uniform(candidates: Sequence[T], rng: random.Random | None = None) -> T | None:
    """Pick one of *candidates* with equal probability, or None if empty."""
    if not candidates:
        return None
    return (rng or random).choice(candidates)


class CriteriaSelector:
    """Selects a single random question for a validated filter."""

    def __init__(self, store: "QuestionStore | None" = None):
        self._store = store

    @property
    def store(self) -> "QuestionStore":
        if self._store is not None:
            return self._store
        from question_service.services.question_store import get_question_store
        return get_question_store()

    async def select(self, difficulty: str, topic: str) -> Question | None:
        """
        Return a uniformly chosen question matching the filter, or None.

        "Nothing matched" is a normal outcome and is returned as None;
        exceptions raised here come from the store itself.
        """
        question = await self.store.find_random_match(
            getattr(difficulty, "value", difficulty),
            getattr(topic, "value", topic),
        )
        if question is None:
            logger.debug("No question for difficulty=%s topic=%s", difficulty, topic)
        return question
