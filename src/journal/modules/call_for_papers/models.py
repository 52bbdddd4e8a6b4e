"""Call-for-papers database models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal.core.constants import MAX_TITLE_LENGTH
from journal.core.database.base import Base, TimestampMixin, UUIDMixin


class CallForPapers(Base, UUIDMixin, TimestampMixin):
    """An open call for journal submissions.

    Attributes:
        title: Call title
        description: What the call is about
        deadline: Submission deadline
        is_active: Whether the call is listed publicly
    """

    __tablename__ = "calls_for_papers"

    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CallForPapers(id={self.id}, title={self.title})>"
