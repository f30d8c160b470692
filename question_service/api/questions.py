"""
Read-only question endpoints.

Serves the same public question shape as the matching bus (see
``format_question_response``).  Creating, editing and deleting
questions is handled elsewhere.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status

from question_service.matching.config import MSG_NOT_FOUND
from question_service.matching.errors import InvalidCriteriaError
from question_service.matching.selector import CriteriaSelector, validate_criteria
from question_service.schemas.question import (
    QuestionListResponse,
    QuestionResponse,
    format_question_response,
)
from question_service.services.question_store import QuestionStore, get_question_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=QuestionListResponse)
async def get_all_questions(store: QuestionStore = Depends(get_question_store)):
    """List every stored question."""
    try:
        questions = await store.find_all()
    except Exception:
        logger.exception("Failed to list questions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unknown error when getting all questions!",
        )
    return QuestionListResponse(
        message=f"Found {len(questions)} questions",
        data=[format_question_response(q) for q in questions],
    )


@router.get("/random", response_model=QuestionResponse)
async def get_random_question(
    difficulty: str | None = Query(None, examples=["Medium"]),
    topics: str | None = Query(None, description="Topic label", examples=["Graphs"]),
    store: QuestionStore = Depends(get_question_store),
):
    """
    Return one question chosen uniformly among those matching the filter.

    Uses the same validation and selection as the matching bus.
    """
    if not difficulty:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Difficulty must be specified")
    if not topics:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Topics must be specified")
    try:
        valid_difficulty, valid_topic = validate_criteria(difficulty, topics)
    except InvalidCriteriaError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)

    try:
        question = await CriteriaSelector(store).select(valid_difficulty, valid_topic)
    except Exception:
        logger.exception("Random question lookup failed for %s/%s", difficulty, topics)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unknown error when getting a random question!",
        )

    if question is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MSG_NOT_FOUND)

    return QuestionResponse(
        message=f"Found a random question for the difficulty: {difficulty} and topic: {topics}",
        data=format_question_response(question),
    )


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: str, store: QuestionStore = Depends(get_question_store)):
    """Fetch a single question by ID."""
    try:
        uuid.UUID(question_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ID {question_id} is invalid",
        )
    try:
        question = await store.find_by_id(question_id)
    except Exception:
        logger.exception("Failed to load question %s", question_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unknown error when getting question!",
        )
    if question is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question {question_id} not found",
        )
    return QuestionResponse(message="Found question", data=format_question_response(question))
