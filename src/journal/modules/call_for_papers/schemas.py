"""Pydantic schemas for call-for-papers operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from journal.core.constants import MAX_TITLE_LENGTH


class CallForPapersCreate(BaseModel):
    """Schema for opening a call for papers."""

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str = Field(..., min_length=1)
    deadline: datetime
    is_active: bool = True


class CallForPapersUpdate(BaseModel):
    """Schema for editing a call. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(None, min_length=1)
    deadline: datetime | None = None
    is_active: bool | None = None


class CallForPapersResponse(BaseModel):
    """Schema for call-for-papers response data."""

    id: UUID
    title: str
    description: str
    deadline: datetime
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CallForPapersCreated(CallForPapersResponse):
    """A new call together with the notification announcing it."""

    notification_id: UUID


class CallForPapersListResponse(BaseModel):
    """Schema for listing calls for papers."""

    items: list[CallForPapersResponse]
    total: int
