from pydantic import BaseModel, Field
from typing import Optional, List


class EmployeeBase(BaseModel):
    """
    Base Pydantic model for an employee profile (assessment subject).
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Employee full name"
    )

    position: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Job title"
    )


class EmployeeCreate(EmployeeBase):
    """
    Model for creating an employee profile in the caller's company.
    Admins may target another company.
    """

    company_id: Optional[str] = None


class EmployeeResponse(EmployeeBase):
    """
    Model returned in API responses.
    """

    id: str
    company_id: str
    created_by_user_id: str
    linked_user_id: Optional[str] = Field(
        default=None,
        description="Set when the profile belongs to a registered user"
    )

    class Config:
        from_attributes = True


class EmployeeListResponse(BaseModel):
    items: List[EmployeeResponse]
    total: int
