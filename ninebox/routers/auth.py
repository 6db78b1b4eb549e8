"""
Auth Router - Nine-Box Talent Review
ninebox/routers/auth.py

Login with e-mail and password; returns a bearer token.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ninebox.config import settings
from ninebox.core.dependencies import get_current_user, get_user_repository
from ninebox.core.errors import raise_error
from ninebox.core.security import create_access_token, verify_password
from ninebox.models.assessment import ErrorResponse
from ninebox.models.user import LoginRequest, TokenResponse, UserResponse
from ninebox.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {
            "model": ErrorResponse,
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "INVALID_CREDENTIALS",
                            "message": "Invalid e-mail or password",
                            "details": None,
                            "timestamp": "2026-01-28T12:00:00Z"
                        }
                    }
                }
            }
        },
    },
    summary="Log in",
    description="Checks e-mail (case-insensitive) and password and returns a JWT access token.",
)
async def login(
    payload: LoginRequest,
    user_repo: UserRepository = Depends(get_user_repository),
) -> TokenResponse:
    record = user_repo.get_credentials(payload.email)
    if record is None or not verify_password(payload.password, record.get("password_hash", "")):
        logger.info(f"Failed login for {payload.email}")
        raise_error(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", "Invalid e-mail or password")

    user = user_repo.get_by_id(record["id"])
    token = create_access_token(user["id"], user["role"].value)
    logger.info(f"User {user['id']} logged in")
    return TokenResponse(access_token=token, user=UserResponse(**user))


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
)
async def me(user: Dict[str, Any] = Depends(get_current_user)) -> UserResponse:
    return UserResponse(**user)
