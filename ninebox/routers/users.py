"""
User Router - Nine-Box Talent Review
ninebox/routers/users.py

User management for admins and directors. Creating a user also creates the
employee profile through which colleagues assess them.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ninebox.config import settings
from ninebox.core.dependencies import get_user_repository, require_roles
from ninebox.core.errors import (
    raise_bad_request,
    raise_conflict,
    raise_forbidden,
    raise_not_found,
    raise_validation_error,
)
from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.core.security import hash_password
from ninebox.models.assessment import ErrorResponse
from ninebox.models.enumerations import Role
from ninebox.models.user import UserCreate, UserListResponse, UserResponse
from ninebox.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/users", tags=["Users"])

MANAGING_ROLES = (Role.ADMIN, Role.DIRECTOR)


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="Admins see every non-admin user; directors see their own company.",
)
async def list_users(
    user: Dict[str, Any] = Depends(require_roles(*MANAGING_ROLES)),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    company_id = None if user["role"] == Role.ADMIN else user["company_id"]
    items = [UserResponse(**u) for u in user_repo.get_all(company_id=company_id, exclude_admins=True)]
    return UserListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse, "description": "Role not allowed to create this user"},
        404: {"model": ErrorResponse, "description": "Company not found"},
        409: {"model": ErrorResponse, "description": "E-mail already registered"},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    user: Dict[str, Any] = Depends(require_roles(*MANAGING_ROLES)),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    if payload.role == Role.ADMIN:
        raise_validation_error("Role must be one of: director, manager", {"field": "role"})

    if user["role"] == Role.DIRECTOR:
        if payload.role != Role.MANAGER:
            raise_forbidden("Directors can only create managers")
        if payload.company_id and payload.company_id != user["company_id"]:
            raise_forbidden("Directors can only create users in their own company")
        company_id = user["company_id"]
    else:
        company_id = payload.company_id or user["company_id"]

    try:
        created = user_repo.create(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
            role=payload.role,
            company_id=company_id,
            created_by_user_id=user["id"],
        )
    except DuplicateEntityException:
        raise_conflict("EMAIL_ALREADY_REGISTERED", "A user with this e-mail already exists")
    except EntityNotFoundException:
        raise_not_found("company")
    return UserResponse(**created)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse, "description": "Cannot delete yourself"},
        403: {"model": ErrorResponse, "description": "Outside the caller's authority"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Delete a user (cascade)",
    description="Also removes the user's assessments, their employee profile and assessments about it.",
)
async def delete_user(
    user_id: str,
    user: Dict[str, Any] = Depends(require_roles(*MANAGING_ROLES)),
    user_repo: UserRepository = Depends(get_user_repository),
) -> None:
    if user_id == user["id"]:
        raise_bad_request("You cannot delete your own account")

    target = user_repo.get_by_id(user_id)
    if target is None:
        raise_not_found("user")

    if user["role"] == Role.DIRECTOR and (
        target["company_id"] != user["company_id"] or target["role"] != Role.MANAGER
    ):
        raise_forbidden("Directors can only delete managers of their own company")
    if target["role"] == Role.ADMIN:
        raise_forbidden("Administrators cannot be deleted")

    try:
        user_repo.delete_cascade(user_id)
    except EntityNotFoundException:
        raise_not_found("user")
