"""
Results Router - Nine-Box Talent Review
ninebox/routers/results.py

Aggregated grid placements across raters.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ninebox.config import settings
from ninebox.core.dependencies import get_scoring_service, require_roles
from ninebox.models.assessment import EmployeeResult, EmployeeResultListResponse
from ninebox.models.enumerations import Role
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/results", tags=["Results"])


@router.get(
    "",
    response_model=EmployeeResultListResponse,
    summary="Aggregated results",
    description=(
        "One entry per assessed employee with the rounded mean levels of all raters "
        "and the retention-risk flag. With rater_id, that rater's assessments are "
        "returned one by one. Directors always see their own company."
    ),
)
async def list_results(
    rater_id: Optional[str] = Query(default=None, description="Return this rater's assessments unaggregated"),
    company_id: Optional[str] = Query(default=None, description="Only assessments by users of this company"),
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN, Role.DIRECTOR)),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> EmployeeResultListResponse:
    if user["role"] == Role.DIRECTOR:
        company_id = user["company_id"]

    results = scoring_service.aggregate_results(rater_id=rater_id, company_id=company_id)
    logger.info(f"Results requested by {user['id']}: {len(results)} item(s)")
    items = [EmployeeResult(**r) for r in results]
    return EmployeeResultListResponse(items=items, total=len(items))
