"""
Scoring Router - Nine-Box Talent Review
ninebox/routers/scoring.py

Classify an answer set without persisting it, so a questionnaire can show
progress and the resulting grid box before submission.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ninebox.config import settings
from ninebox.core.dependencies import get_current_user, get_scoring_service
from ninebox.core.errors import raise_validation_error
from ninebox.models.assessment import ErrorResponse, ScorePreviewRequest, ScoringResultResponse
from ninebox.scoring.engine import AnswerValidationError
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/scoring", tags=["Scoring"])


@router.post(
    "/preview",
    response_model=ScoringResultResponse,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Unknown question or value outside the question's options",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "VALIDATION_ERROR",
                            "message": "Unknown question 'perf_typo'",
                            "details": {"question_id": "perf_typo"},
                            "timestamp": "2026-01-28T12:00:00Z"
                        }
                    }
                }
            }
        },
    },
    summary="Preview a classification",
    description="Returns ready=false with the missing question ids until every question is answered.",
)
async def preview_score(
    payload: ScorePreviewRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> ScoringResultResponse:
    try:
        result = scoring_service.preview(payload.answers)
    except AnswerValidationError as e:
        raise_validation_error(e.message, {"question_id": e.question_id})
    return ScoringResultResponse(**result)
