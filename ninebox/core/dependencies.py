"""
Dependencies - Nine-Box Talent Review
ninebox/core/dependencies.py

FastAPI dependency injection for the document store, repositories, services
and the authenticated user.
"""

import logging
from functools import lru_cache
from typing import Any, Dict

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ninebox.config import settings
from ninebox.core.errors import error_detail
from ninebox.core.security import decode_access_token
from ninebox.models.enumerations import Role
from ninebox.repositories.assessment_repository import AssessmentRepository
from ninebox.repositories.base import JsonDocumentStore
from ninebox.repositories.company_repository import CompanyRepository
from ninebox.repositories.employee_repository import EmployeeRepository
from ninebox.repositories.question_repository import QuestionRepository
from ninebox.repositories.seed import build_default_document
from ninebox.repositories.settings_repository import SettingsRepository
from ninebox.repositories.user_repository import UserRepository
from ninebox.services.advice_service import AdviceService
from ninebox.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


@lru_cache()
def get_document_store() -> JsonDocumentStore:
    """Get cached JsonDocumentStore instance (seeded on first access)."""
    return JsonDocumentStore(
        settings.DATA_FILE,
        seed_factory=lambda: build_default_document(settings),
    )


def get_company_repository(store: JsonDocumentStore = Depends(get_document_store)) -> CompanyRepository:
    return CompanyRepository(store)


def get_user_repository(store: JsonDocumentStore = Depends(get_document_store)) -> UserRepository:
    return UserRepository(store)


def get_employee_repository(store: JsonDocumentStore = Depends(get_document_store)) -> EmployeeRepository:
    return EmployeeRepository(store)


def get_assessment_repository(store: JsonDocumentStore = Depends(get_document_store)) -> AssessmentRepository:
    return AssessmentRepository(store)


def get_question_repository(store: JsonDocumentStore = Depends(get_document_store)) -> QuestionRepository:
    return QuestionRepository(store)


def get_settings_repository(store: JsonDocumentStore = Depends(get_document_store)) -> SettingsRepository:
    return SettingsRepository(store)


def get_scoring_service(store: JsonDocumentStore = Depends(get_document_store)) -> ScoringService:
    return ScoringService(
        question_repo=QuestionRepository(store),
        settings_repo=SettingsRepository(store),
        assessment_repo=AssessmentRepository(store),
        employee_repo=EmployeeRepository(store),
        user_repo=UserRepository(store),
    )


@lru_cache()
def get_advice_service() -> AdviceService:
    """Get cached AdviceService (placeholder answers when no key is set)."""
    api_key = settings.GEMINI_API_KEY.get_secret_value() if settings.GEMINI_API_KEY else None
    return AdviceService(api_key=api_key, model=settings.GEMINI_MODEL)


#  Authentication


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_detail("INVALID_TOKEN", message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    user_repo: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    """Resolve the bearer token to the stored user (without password hash)."""
    if creds is None:
        raise _unauthorized("Missing bearer token")
    try:
        token = decode_access_token(creds.credentials)
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        raise _unauthorized("Invalid or expired token")

    user = user_repo.get_by_id(token.sub)
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


def require_roles(*required: Role):
    def checker(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user["role"] not in required:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=error_detail("FORBIDDEN", "Insufficient role"),
            )
        return user
    return checker
