"""
Assessment Router - Nine-Box Talent Review
ninebox/routers/assessments.py

Submission and removal of assessments, plus AI development advice. A rater
holds at most one assessment per employee: resubmitting supersedes the
earlier one.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ninebox.config import settings
from ninebox.core.dependencies import (
    get_advice_service,
    get_assessment_repository,
    get_current_user,
    get_employee_repository,
    get_scoring_service,
    require_roles,
)
from ninebox.core.errors import (
    raise_bad_request,
    raise_conflict,
    raise_forbidden,
    raise_not_found,
    raise_validation_error,
)
from ninebox.core.exceptions import EntityNotFoundException
from ninebox.models.assessment import (
    AdviceResponse,
    AssessmentCreate,
    AssessmentResponse,
    EmployeeResult,
    EmployeeResultListResponse,
    ErrorResponse,
)
from ninebox.models.enumerations import Role
from ninebox.repositories.assessment_repository import AssessmentRepository
from ninebox.repositories.employee_repository import EmployeeRepository
from ninebox.scoring.engine import AnswerValidationError
from ninebox.scoring.grid import get_category
from ninebox.services.advice_service import AdviceService
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/assessments", tags=["Assessments"])


def raise_assessment_incomplete():
    raise_conflict(
        "ASSESSMENT_INCOMPLETE",
        "Every question must be answered before the assessment can be submitted",
    )


#  Routes

@router.post(
    "",
    response_model=AssessmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Self-assessment"},
        403: {"model": ErrorResponse, "description": "Employee belongs to another company"},
        404: {"model": ErrorResponse, "description": "Employee not found"},
        409: {
            "model": ErrorResponse,
            "description": "Answer set incomplete",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "ASSESSMENT_INCOMPLETE",
                            "message": "Every question must be answered before the assessment can be submitted",
                            "details": None,
                            "timestamp": "2026-01-28T12:00:00Z"
                        }
                    }
                }
            }
        },
        422: {"model": ErrorResponse, "description": "Unknown question or invalid answer value"},
    },
    summary="Submit an assessment",
    description="Finalizes the answer set and stores it, replacing the caller's earlier assessment of the same employee.",
)
async def create_assessment(
    payload: AssessmentCreate,
    user: Dict[str, Any] = Depends(get_current_user),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> AssessmentResponse:
    employee = employee_repo.get_by_id(payload.employee_id)
    if employee is None:
        raise_not_found("employee")
    if user["role"] != Role.ADMIN and employee["company_id"] != user["company_id"]:
        raise_forbidden("Employee belongs to another company")
    if employee["linked_user_id"] == user["id"]:
        raise_bad_request("You cannot assess yourself")

    try:
        assessment = scoring_service.submit(user["id"], payload.employee_id, payload.answers)
    except AnswerValidationError as e:
        raise_validation_error(e.message, {"question_id": e.question_id})
    except EntityNotFoundException:
        raise_not_found("employee")

    if assessment is None:
        raise_assessment_incomplete()
    return AssessmentResponse(**assessment)


@router.get(
    "/mine",
    response_model=EmployeeResultListResponse,
    summary="The caller's own assessments",
    description="One entry per assessment made by the caller, with the employee profile and grid box.",
)
async def list_my_assessments(
    user: Dict[str, Any] = Depends(get_current_user),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> EmployeeResultListResponse:
    items = [EmployeeResult(**r) for r in scoring_service.my_results(user["id"])]
    return EmployeeResultListResponse(items=items, total=len(items))


@router.delete(
    "/{assessment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse, "description": "Assessment made in another company"},
        404: {"model": ErrorResponse, "description": "Assessment not found"},
    },
    summary="Delete an assessment",
)
async def delete_assessment(
    assessment_id: str,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN, Role.DIRECTOR)),
    assessment_repo: AssessmentRepository = Depends(get_assessment_repository),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> None:
    assessment = assessment_repo.get_by_id(assessment_id)
    if assessment is None:
        raise_not_found("assessment")

    if user["role"] == Role.DIRECTOR:
        employee = employee_repo.get_by_id(assessment["employee_id"])
        if employee is None or employee["company_id"] != user["company_id"]:
            raise_forbidden("Assessment belongs to another company")

    try:
        assessment_repo.delete(assessment_id)
    except EntityNotFoundException:
        raise_not_found("assessment")


@router.post(
    "/{assessment_id}/advice",
    response_model=AdviceResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Assessment made by someone else / in another company"},
        404: {"model": ErrorResponse, "description": "Assessment or employee not found"},
    },
    summary="Generate development advice",
    description=(
        "Asks the AI model for a development plan based on the employee's position and "
        "grid box and stores it on the assessment. Without a configured API key a fixed "
        "message is returned with generated=false and nothing is stored."
    ),
)
async def generate_advice(
    assessment_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    assessment_repo: AssessmentRepository = Depends(get_assessment_repository),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
    advice_service: AdviceService = Depends(get_advice_service),
) -> AdviceResponse:
    assessment = assessment_repo.get_by_id(assessment_id)
    if assessment is None:
        raise_not_found("assessment")
    employee = employee_repo.get_by_id(assessment["employee_id"])
    if employee is None:
        raise_not_found("employee")

    if user["role"] == Role.MANAGER and assessment["user_id"] != user["id"]:
        raise_forbidden("Managers can only request advice for their own assessments")
    if user["role"] == Role.DIRECTOR and employee["company_id"] != user["company_id"]:
        raise_forbidden("Assessment belongs to another company")

    category = get_category(assessment["performance"], assessment["potential"])
    result = await advice_service.generate_development_plan(
        employee["name"], employee["position"], category
    )

    if result.generated:
        try:
            assessment_repo.set_advice(assessment_id, result.text)
        except EntityNotFoundException:
            raise_not_found("assessment")

    return AdviceResponse(
        assessment_id=assessment_id,
        employee_id=employee["id"],
        advice=result.text,
        generated=result.generated,
    )
