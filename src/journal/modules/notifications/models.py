"""Notification database models."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal.core.constants import MAX_LINK_LENGTH, MAX_TITLE_LENGTH
from journal.core.database.base import Base, TimestampMixin, UUIDMixin


class NotificationType(str, Enum):
    """Categories of site announcement."""

    CALL_FOR_PAPERS = "call_for_papers"
    STUDENT_COMPETITION = "student_competition"
    EDITORIAL_VACANCY = "editorial_vacancy"
    SPECIAL_ISSUE = "special_issue"
    EVENT = "event"
    ANNOUNCEMENT = "announcement"
    PUBLICATION = "publication"
    GENERAL = "general"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Notification(Base, UUIDMixin, TimestampMixin):
    """A site-wide announcement.

    Attributes:
        title: Headline
        content: Body text
        type: One of ``NotificationType``
        link: Optional URL the notification points to
        priority: One of ``NotificationPriority``
        expires_at: When the notification stops being shown, if ever
        is_active: Whether the notification is shown at all
    """

    __tablename__ = "notifications"

    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(50),
        default=NotificationType.GENERAL.value,
        nullable=False,
    )
    link: Mapped[str | None] = mapped_column(
        String(MAX_LINK_LENGTH),
        nullable=True,
    )
    priority: Mapped[str] = mapped_column(
        String(20),
        default=NotificationPriority.MEDIUM.value,
        nullable=False,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, type={self.type})>"
