"""Pydantic schemas for user operations."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from journal.core.constants import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)


# ============================================================
# Password Validation
# ============================================================

# Password complexity rules: (regex pattern, human-readable name)
PASSWORD_COMPLEXITY_RULES: list[tuple[str, str]] = [
    (r"[A-Z]", "uppercase letter"),
    (r"[a-z]", "lowercase letter"),
    (r"\d", "digit"),
]


def validate_password_complexity(password: str) -> str:
    """Validate password meets complexity requirements.

    Requirements:
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit

    Raises:
        ValueError: If password doesn't meet requirements
    """
    missing = [
        name
        for pattern, name in PASSWORD_COMPLEXITY_RULES
        if not re.search(pattern, password)
    ]

    if missing:
        if len(missing) == 1:
            raise ValueError(f"Password must contain at least one {missing[0]}")
        raise ValueError(f"Password must contain at least one: {', '.join(missing)}")

    return password


# ============================================================
# User Schemas
# ============================================================


class RoleSummary(BaseModel):
    """The role embedded in user responses."""

    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserBase(BaseModel):
    """Base schema for user data."""

    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class UserCreate(UserBase):
    """Schema for creating a user from the admin area."""

    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role_id: UUID
    permissions: list[str] = Field(
        default_factory=list,
        description="Direct permission keys granted on top of the role",
    )
    is_active: bool = True

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Validate password complexity."""
        return validate_password_complexity(v)


class UserUpdate(BaseModel):
    """Schema for updating user data. Omitted fields are left unchanged."""

    email: EmailStr | None = None
    full_name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    password: str | None = Field(
        None, min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role_id: UUID | None = None
    is_active: bool | None = None

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str | None) -> str | None:
        """Validate password complexity."""
        if v is None:
            return v
        return validate_password_complexity(v)


class UserPermissionsUpdate(BaseModel):
    """Replacement set of direct permission keys for a user."""

    permissions: list[str]


class UserResponse(UserBase):
    """Schema for user response data."""

    id: UUID
    is_active: bool
    role: RoleSummary
    permissions: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("direct_permission_keys", "permissions"),
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    """Schema for listing users."""

    items: list[UserResponse]
    total: int


class AssignableRoleResponse(BaseModel):
    """A role the current user may hand out."""

    id: UUID
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)
