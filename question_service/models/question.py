"""
Question model — the stored coding problems served to paired users.

A question is owned by the CRUD surface; the matching bus only ever
reads it. Nested structures (examples, snippets, signature, test cases)
are kept as JSONB documents since they are always read as a whole.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Integer,
    String,
    Text,
    Enum as SAEnum,
    event,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from question_service.database import Base


class Difficulty(str, enum.Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Topic(str, enum.Enum):
    STRINGS = "Strings"
    ARRAYS = "Arrays"
    LINKED_LIST = "Linked List"
    HEAPS = "Heaps"
    HASHMAP = "Hashmap"
    GREEDY = "Greedy"
    GRAPHS = "Graphs"
    DYNAMIC_PROGRAMMING = "Dynamic Programming"


DEFAULT_TIMEOUT_SECONDS = 1


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    difficulty: Mapped[Difficulty] = mapped_column(
        SAEnum(
            Difficulty,
            name="difficulty",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        index=True,
    )
    topics: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False)

    problem_statement: Mapped[str] = mapped_column(Text, nullable=False)
    constraints: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    examples: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list)
    code_snippets: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list)

    entry_point: Mapped[str] = mapped_column(String(100), nullable=False)
    timeout: Mapped[int] = mapped_column(Integer, default=DEFAULT_TIMEOUT_SECONDS)
    signature: Mapped[dict | None] = mapped_column(JSONB)
    test_cases: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def has_topic(self, topic: str) -> bool:
        return topic in (self.topics or [])

    def __repr__(self) -> str:
        return (
            f"<Question {self.title} "
            f"({self.difficulty.value if self.difficulty else 'N/A'})>"
        )


@event.listens_for(Question, "init")
def _set_question_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "timeout" not in kwargs:
        target.timeout = DEFAULT_TIMEOUT_SECONDS
    for field in ("constraints", "examples", "code_snippets", "test_cases"):
        if field not in kwargs:
            setattr(target, field, [])
