from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class CompanyBase(BaseModel):
    """
    Base Pydantic model for Company.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Company name"
    )

    disable_user_add_employees: bool = Field(
        default=False,
        description="When set, only admins may create employee profiles in this company"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Company name cannot be blank")
        return value


class CompanyCreate(CompanyBase):
    """
    Model for creating a new company.
    """
    pass


class CompanyUpdate(BaseModel):
    """
    Model for partially updating an existing company.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    disable_user_add_employees: Optional[bool] = None


class CompanyResponse(CompanyBase):
    """
    Model returned in API responses.
    """

    id: str = Field(..., description="Company identifier (comp-<uuid>)")

    class Config:
        from_attributes = True


class CompanyListResponse(BaseModel):
    items: List[CompanyResponse]
    total: int
