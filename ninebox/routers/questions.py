"""
Question Router - Nine-Box Talent Review
ninebox/routers/questions.py

The active question bank. Every change invalidates the cached scoring config.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ninebox.config import settings
from ninebox.core.dependencies import (
    get_current_user,
    get_question_repository,
    get_scoring_service,
    require_roles,
)
from ninebox.core.errors import raise_conflict, raise_not_found
from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.models.assessment import ErrorResponse
from ninebox.models.enumerations import Role
from ninebox.models.question import Question, QuestionCreate, QuestionListResponse, QuestionUpdate
from ninebox.repositories.question_repository import QuestionRepository
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/questions", tags=["Questions"])


@router.get(
    "",
    response_model=QuestionListResponse,
    summary="List the question bank in order",
)
async def list_questions(
    user: Dict[str, Any] = Depends(get_current_user),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> QuestionListResponse:
    questions = list(scoring_service.load_config().questions)
    return QuestionListResponse(items=questions, total=len(questions))


@router.get(
    "/{question_id}",
    response_model=Question,
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
    summary="Get one question",
)
async def get_question(
    question_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    question_repo: QuestionRepository = Depends(get_question_repository),
) -> Question:
    question = question_repo.get_by_id(question_id)
    if question is None:
        raise_not_found("question")
    return question


@router.post(
    "",
    response_model=Question,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Question id already used"}},
    summary="Add a question",
)
async def create_question(
    payload: QuestionCreate,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    question_repo: QuestionRepository = Depends(get_question_repository),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> Question:
    try:
        question = question_repo.create(payload.model_dump())
    except DuplicateEntityException as e:
        raise_conflict("QUESTION_ALREADY_EXISTS", e.message)
    scoring_service.invalidate_config()
    return question


@router.put(
    "/{question_id}",
    response_model=Question,
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
    summary="Replace a question",
)
async def update_question(
    question_id: str,
    payload: QuestionUpdate,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    question_repo: QuestionRepository = Depends(get_question_repository),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> Question:
    try:
        question = question_repo.update(question_id, payload.model_dump())
    except EntityNotFoundException:
        raise_not_found("question")
    scoring_service.invalidate_config()
    return question


@router.delete(
    "/{question_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
    summary="Remove a question",
)
async def delete_question(
    question_id: str,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    question_repo: QuestionRepository = Depends(get_question_repository),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> None:
    try:
        question_repo.delete(question_id)
    except EntityNotFoundException:
        raise_not_found("question")
    scoring_service.invalidate_config()
