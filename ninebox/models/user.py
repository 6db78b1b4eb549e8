from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from ninebox.models.enumerations import Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserBase(BaseModel):
    """
    Base Pydantic model for a registered user (rater).
    """

    email: str = Field(
        ...,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Login e-mail, unique across the system"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name"
    )

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class UserCreate(UserBase):
    """
    Model for creating a user. Admins may pick any company and the director
    role; directors always create managers in their own company.
    """

    password: str = Field(..., min_length=6, max_length=72)
    company_id: Optional[str] = Field(
        default=None,
        description="Target company, defaults to the creator's company"
    )
    role: Role = Field(default=Role.MANAGER)


class UserResponse(UserBase):
    """
    Model returned in API responses. Never carries the password hash.
    """

    id: str
    role: Role
    company_id: str

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ConvertToUserRequest(BaseModel):
    """
    Create a login for an existing employee profile.
    """

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value
