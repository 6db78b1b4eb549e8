"""
Company Router - Nine-Box Talent Review
ninebox/routers/companies.py

Company CRUD. Deleting a company removes its users, employees and every
assessment made by or about them.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ninebox.config import settings
from ninebox.core.dependencies import get_company_repository, get_current_user, require_roles
from ninebox.core.errors import raise_bad_request, raise_conflict, raise_not_found
from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.models.assessment import ErrorResponse
from ninebox.models.company import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)
from ninebox.models.enumerations import Role
from ninebox.repositories.company_repository import CompanyRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/companies", tags=["Companies"])


def raise_company_not_found():
    raise_not_found("company")


def raise_duplicate_company():
    raise_conflict("COMPANY_ALREADY_EXISTS", "A company with this name already exists")


#  Routes

@router.get(
    "",
    response_model=CompanyListResponse,
    summary="List companies",
)
async def list_companies(
    user: Dict[str, Any] = Depends(get_current_user),
    company_repo: CompanyRepository = Depends(get_company_repository),
) -> CompanyListResponse:
    items = [CompanyResponse(**c) for c in company_repo.get_all()]
    return CompanyListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Company name already used"},
    },
    summary="Create a company",
)
async def create_company(
    payload: CompanyCreate,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    company_repo: CompanyRepository = Depends(get_company_repository),
) -> CompanyResponse:
    try:
        company = company_repo.create(payload.name, payload.disable_user_add_employees)
    except DuplicateEntityException:
        raise_duplicate_company()
    return CompanyResponse(**company)


@router.patch(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Company not found"},
        409: {"model": ErrorResponse, "description": "Company name already used"},
    },
    summary="Update a company",
    description="Rename a company or toggle whether its managers may add employee profiles.",
)
async def update_company(
    company_id: str,
    payload: CompanyUpdate,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    company_repo: CompanyRepository = Depends(get_company_repository),
) -> CompanyResponse:
    name = payload.name.strip() if payload.name is not None else None
    if name is not None and company_repo.check_duplicate(name, exclude_id=company_id):
        raise_duplicate_company()

    try:
        company = company_repo.update(
            company_id,
            name=name or None,
            disable_user_add_employees=payload.disable_user_add_employees,
        )
    except EntityNotFoundException:
        raise_company_not_found()
    return CompanyResponse(**company)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse, "description": "Own company cannot be deleted"},
        404: {"model": ErrorResponse, "description": "Company not found"},
    },
    summary="Delete a company (cascade)",
)
async def delete_company(
    company_id: str,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN)),
    company_repo: CompanyRepository = Depends(get_company_repository),
) -> None:
    if company_id == user["company_id"]:
        raise_bad_request("You cannot delete your own company")
    try:
        company_repo.delete_cascade(company_id)
    except EntityNotFoundException:
        raise_company_not_found()
