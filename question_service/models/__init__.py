"""SQLAlchemy ORM models for the question service."""

from question_service.models.question import Question, Difficulty, Topic

__all__ = [
    "Question", "Difficulty", "Topic",
]
