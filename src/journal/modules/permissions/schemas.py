"""Pydantic schemas for permission catalog operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.core.constants import MAX_DESCRIPTION_LENGTH, MAX_PERMISSION_KEY_LENGTH
from journal.core.permissions.catalog import InvalidPermissionKeyError, parse_permission_key


def _validate_key(key: str) -> str:
    try:
        parse_permission_key(key)
    except InvalidPermissionKeyError as exc:
        raise ValueError(
            "Permission keys look like 'resource.ACTION', e.g. 'article.UPDATE'"
        ) from exc
    return key


class PermissionCreate(BaseModel):
    """Schema for adding a key to the catalog."""

    key: str = Field(..., min_length=3, max_length=MAX_PERMISSION_KEY_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("key")
    @classmethod
    def key_format(cls, v: str) -> str:
        return _validate_key(v)


class PermissionUpdate(BaseModel):
    """Schema for editing a catalog entry. Omitted fields are left unchanged."""

    key: str | None = Field(None, min_length=3, max_length=MAX_PERMISSION_KEY_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("key")
    @classmethod
    def key_format(cls, v: str | None) -> str | None:
        return v if v is None else _validate_key(v)


class PermissionResponse(BaseModel):
    """Schema for a catalog entry."""

    id: UUID
    key: str
    description: str | None = None
    resource: str
    action: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PermissionWithStats(PermissionResponse):
    """A catalog entry with its assignment counts.

    ``total_assignments`` is what the delete guard looks at.
    """

    role_count: int = 0
    user_count: int = 0
    total_assignments: int = 0


class PermissionListResponse(BaseModel):
    """Schema for listing the catalog."""

    items: list[PermissionWithStats]
    total: int


class PermissionSyncResponse(BaseModel):
    """Outcome of syncing the default catalog into the store."""

    created: list[str]
    total: int
