"""Editorial board database models."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_LINK_LENGTH,
    MAX_NAME_LENGTH,
    MAX_TITLE_LENGTH,
)
from journal.core.database.base import Base, TimestampMixin, UUIDMixin


class BoardMemberType(str, Enum):
    EDITOR = "Editor"
    ADVISOR = "Advisor"


class EditorialBoardMember(Base, UUIDMixin, TimestampMixin):
    """A member of the editorial board or the board of advisors.

    Attributes:
        name: Display name
        designation: Title shown under the name, e.g. "Managing Editor"
        member_type: One of ``BoardMemberType``
        bio: Short biography
        image: Optional portrait URL
        email: Optional contact email
        linkedin: Optional LinkedIn profile URL
        orcid: Optional ORCID identifier
        expertise: Subject areas, in display order
        position: Display order on the board page, starting at 1
        archived: Hidden from the public board when True
    """

    __tablename__ = "editorial_board_members"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    designation: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
    )
    member_type: Mapped[str] = mapped_column(
        String(20),
        default=BoardMemberType.EDITOR.value,
        nullable=False,
    )
    bio: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(
        String(MAX_LINK_LENGTH),
        nullable=True,
    )
    email: Mapped[str | None] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=True,
    )
    linkedin: Mapped[str | None] = mapped_column(
        String(MAX_LINK_LENGTH),
        nullable=True,
    )
    orcid: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    expertise: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )
    archived: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<EditorialBoardMember(id={self.id}, position={self.position})>"
