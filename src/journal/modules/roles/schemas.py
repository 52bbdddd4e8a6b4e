"""Pydantic schemas for role operations."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from journal.core.constants import MAX_DESCRIPTION_LENGTH, MAX_ROLE_NAME_LENGTH


class RoleCreate(BaseModel):
    """Schema for creating a role."""

    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[str] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    """Schema for updating a role.

    ``permissions``, when given, replaces the role's whole grant set.
    """

    name: str | None = Field(None, min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[str] | None = None


class RoleResponse(BaseModel):
    """Schema for role response data."""

    id: UUID
    name: str
    description: str | None = None
    is_system: bool
    permissions: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("sorted_permission_keys", "permissions"),
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleWithStats(RoleResponse):
    """A role with the number of users holding it."""

    user_count: int = 0


class RoleListResponse(BaseModel):
    """Schema for listing roles."""

    items: list[RoleWithStats]
    total: int
