"""
Employee Router - Nine-Box Talent Review
ninebox/routers/employees.py

Employee profiles: the subjects of assessments.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ninebox.config import settings
from ninebox.core.dependencies import (
    get_company_repository,
    get_current_user,
    get_employee_repository,
    get_user_repository,
    require_roles,
)
from ninebox.core.errors import raise_conflict, raise_forbidden, raise_not_found
from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.core.security import hash_password
from ninebox.models.assessment import ErrorResponse
from ninebox.models.employee import EmployeeCreate, EmployeeListResponse, EmployeeResponse
from ninebox.models.enumerations import Role
from ninebox.models.user import ConvertToUserRequest, UserResponse
from ninebox.repositories.company_repository import CompanyRepository
from ninebox.repositories.employee_repository import EmployeeRepository
from ninebox.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/employees", tags=["Employees"])


def _load_in_scope(employee_id: str, user: Dict[str, Any], employee_repo: EmployeeRepository) -> Dict[str, Any]:
    """Fetch a profile the caller may manage (admins: any company)."""
    employee = employee_repo.get_by_id(employee_id)
    if employee is None:
        raise_not_found("employee")
    if user["role"] != Role.ADMIN and employee["company_id"] != user["company_id"]:
        raise_forbidden("Employee belongs to another company")
    return employee


@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employee profiles",
    description="Admins see every company (optionally filtered); others see their own company.",
)
async def list_employees(
    company_id: Optional[str] = Query(default=None, description="Admin-only company filter"),
    user: Dict[str, Any] = Depends(get_current_user),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeListResponse:
    if user["role"] != Role.ADMIN:
        company_id = user["company_id"]
    items = [EmployeeResponse(**e) for e in employee_repo.get_all(company_id=company_id)]
    return EmployeeListResponse(items=items, total=len(items))


@router.get(
    "/available",
    response_model=EmployeeListResponse,
    summary="Profiles the caller can still assess",
)
async def list_available_employees(
    user: Dict[str, Any] = Depends(get_current_user),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeListResponse:
    items = [
        EmployeeResponse(**e)
        for e in employee_repo.get_available_for_rater(user["id"], user["company_id"])
    ]
    return EmployeeListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse, "description": "Company does not allow users to add employees"},
        404: {"model": ErrorResponse, "description": "Company not found"},
    },
    summary="Create an employee profile",
)
async def create_employee(
    payload: EmployeeCreate,
    user: Dict[str, Any] = Depends(get_current_user),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
    company_repo: CompanyRepository = Depends(get_company_repository),
) -> EmployeeResponse:
    if user["role"] == Role.ADMIN:
        company_id = payload.company_id or user["company_id"]
    else:
        if payload.company_id and payload.company_id != user["company_id"]:
            raise_forbidden("Employees can only be added to your own company")
        company_id = user["company_id"]
        company = company_repo.get_by_id(company_id)
        if company and company["disable_user_add_employees"]:
            raise_forbidden("Adding employees is disabled for your company")

    try:
        employee = employee_repo.create(
            name=payload.name,
            position=payload.position,
            company_id=company_id,
            created_by_user_id=user["id"],
        )
    except EntityNotFoundException:
        raise_not_found("company")
    return EmployeeResponse(**employee)


@router.post(
    "/{employee_id}/convert-to-user",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found"},
        409: {"model": ErrorResponse, "description": "E-mail taken or profile already linked"},
    },
    summary="Create a manager account for an existing profile",
)
async def convert_employee_to_user(
    employee_id: str,
    payload: ConvertToUserRequest,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN, Role.DIRECTOR)),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    employee = _load_in_scope(employee_id, user, employee_repo)
    if employee["linked_user_id"]:
        raise_conflict("EMPLOYEE_ALREADY_LINKED", "This employee already has a user account")

    try:
        created = user_repo.create(
            email=payload.email,
            name=employee["name"],
            password_hash=hash_password(payload.password),
            role=Role.MANAGER,
            company_id=employee["company_id"],
            created_by_user_id=user["id"],
            employee_id=employee_id,
        )
    except DuplicateEntityException as e:
        raise_conflict("EMAIL_ALREADY_REGISTERED", e.message)
    except EntityNotFoundException:
        raise_not_found("employee")

    logger.info(f"Converted employee {employee_id} to user {created['id']}")
    return UserResponse(**created)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found"},
    },
    summary="Delete an employee profile (cascade)",
)
async def delete_employee(
    employee_id: str,
    user: Dict[str, Any] = Depends(require_roles(Role.ADMIN, Role.DIRECTOR)),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> None:
    _load_in_scope(employee_id, user, employee_repo)
    try:
        employee_repo.delete_cascade(employee_id)
    except EntityNotFoundException:
        raise_not_found("employee")
