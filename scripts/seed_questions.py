"""
Question seeder — populates the database with sample questions for development.

Usage:
    python scripts/seed_questions.py

Inserts every entry of ``SAMPLE_QUESTIONS`` whose title is not already
stored.  Idempotent: existing titles are skipped.
"""

import asyncio

from sqlalchemy import select

from question_service.database import async_session
from question_service.models.question import Difficulty, Question
from question_service.services.sample_questions import SAMPLE_QUESTIONS


async def seed() -> None:
    """Insert sample questions into the database. Safe to run multiple times."""

    async with async_session() as session:
        existing_titles = set(
            (await session.execute(select(Question.title))).scalars().all()
        )

        new_count = 0
        for data in SAMPLE_QUESTIONS:
            if data["title"] in existing_titles:
                continue
            session.add(Question(**{**data, "difficulty": Difficulty(data["difficulty"])}))
            new_count += 1

        await session.commit()

    print("\n  Seed complete!")
    print(f"  Questions: {new_count} new, {len(SAMPLE_QUESTIONS) - new_count} existing")
    counts: dict[str, int] = {}
    for data in SAMPLE_QUESTIONS:
        counts[data["difficulty"]] = counts.get(data["difficulty"], 0) + 1
    for difficulty, count in sorted(counts.items()):
        print(f"    {difficulty}: {count}")


if __name__ == "__main__":
    asyncio.run(seed())
