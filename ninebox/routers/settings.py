"""
Settings Router - Nine-Box Talent Review
ninebox/routers/settings.py

Per-axis classification thresholds.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ninebox.config import settings
from ninebox.core.dependencies import (
    get_current_user,
    get_scoring_service,
    get_settings_repository,
    require_roles,
)
from ninebox.models.assessment import ErrorResponse
from ninebox.models.enumerations import Role
from ninebox.models.settings import StoredThresholdSettings, ThresholdSettings
from ninebox.repositories.settings_repository import SettingsRepository
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/settings", tags=["Settings"])


@router.get(
    "/thresholds",
    response_model=StoredThresholdSettings,
    summary="Current thresholds",
    description="Stored thresholds, with the configured defaults filling any missing axis.",
)
async def get_thresholds(
    user: Dict[str, Any] = Depends(get_current_user),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> StoredThresholdSettings:
    return StoredThresholdSettings.model_validate(scoring_service.get_thresholds())


@router.put(
    "/thresholds",
    response_model=ThresholdSettings,
    responses={422: {"model": ErrorResponse, "description": "low_max must be less than med_max"}},
    summary="Update thresholds",
)
async def update_thresholds(
    payload: ThresholdSettings,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    settings_repo: SettingsRepository = Depends(get_settings_repository),
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> ThresholdSettings:
    settings_repo.set_thresholds(payload.model_dump())
    scoring_service.invalidate_config()
    return payload
