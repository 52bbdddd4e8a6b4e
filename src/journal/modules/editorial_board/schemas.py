"""Pydantic schemas for editorial board operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from journal.core.constants import MAX_LINK_LENGTH, MAX_NAME_LENGTH, MAX_TITLE_LENGTH
from journal.modules.editorial_board.models import BoardMemberType


class BoardMemberCreate(BaseModel):
    """Schema for adding a board member.

    Without a position the member is placed after everyone else.
    """

    name: str = Field(..., min_length=2, max_length=MAX_NAME_LENGTH)
    designation: str = Field(..., min_length=2, max_length=MAX_TITLE_LENGTH)
    member_type: BoardMemberType = BoardMemberType.EDITOR
    bio: str = Field(..., min_length=1)
    image: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    email: EmailStr | None = None
    linkedin: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    orcid: str | None = Field(None, max_length=50)
    expertise: list[str] = Field(default_factory=list)
    position: int | None = Field(None, ge=1)
    archived: bool = False


class BoardMemberUpdate(BaseModel):
    """Schema for editing a board member. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=2, max_length=MAX_NAME_LENGTH)
    designation: str | None = Field(None, min_length=2, max_length=MAX_TITLE_LENGTH)
    member_type: BoardMemberType | None = None
    bio: str | None = Field(None, min_length=1)
    image: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    email: EmailStr | None = None
    linkedin: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    orcid: str | None = Field(None, max_length=50)
    expertise: list[str] | None = None
    position: int | None = Field(None, ge=1)
    archived: bool | None = None


class BoardOrderUpdate(BaseModel):
    """New board order: every listed member moves to its index, starting at 1."""

    member_ids: list[UUID] = Field(..., min_length=1)

    @field_validator("member_ids")
    @classmethod
    def no_duplicates(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("Member ids must not repeat")
        return v


class BoardMemberResponse(BaseModel):
    """Schema for board member response data."""

    id: UUID
    name: str
    designation: str
    member_type: BoardMemberType
    bio: str
    image: str | None = None
    email: str | None = None
    linkedin: str | None = None
    orcid: str | None = None
    expertise: list[str]
    position: int
    archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BoardMemberListResponse(BaseModel):
    """Schema for listing board members."""

    items: list[BoardMemberResponse]
    total: int
