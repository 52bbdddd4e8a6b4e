"""Pydantic schemas for notification operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from journal.core.constants import MAX_LINK_LENGTH, MAX_TITLE_LENGTH
from journal.modules.notifications.models import NotificationPriority, NotificationType


class NotificationCreate(BaseModel):
    """Schema for creating a notification."""

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.GENERAL
    link: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    expires_at: datetime | None = None
    is_active: bool = True


class NotificationUpdate(BaseModel):
    """Schema for updating a notification. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str | None = Field(None, min_length=1)
    type: NotificationType | None = None
    link: str | None = Field(None, max_length=MAX_LINK_LENGTH)
    priority: NotificationPriority | None = None
    expires_at: datetime | None = None
    is_active: bool | None = None


class NotificationResponse(BaseModel):
    """Schema for notification response data."""

    id: UUID
    title: str
    content: str
    type: NotificationType
    link: str | None = None
    priority: NotificationPriority
    expires_at: datetime | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    """Schema for listing notifications."""

    items: list[NotificationResponse]
    total: int
