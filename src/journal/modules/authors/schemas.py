"""Pydantic schemas for author operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from journal.core.constants import MAX_NAME_LENGTH


class AuthorCreate(BaseModel):
    """Schema for adding an author to the directory."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr | None = None
    bio: str | None = None


class AuthorUpdate(BaseModel):
    """Schema for editing an author. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr | None = None
    bio: str | None = None


class AuthorResponse(BaseModel):
    """Schema for author response data."""

    id: UUID
    name: str
    slug: str
    email: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorListResponse(BaseModel):
    """Schema for listing authors."""

    items: list[AuthorResponse]
    total: int
