"""Author database models."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from journal.core.database.base import Base, TimestampMixin, UUIDMixin


class Author(Base, UUIDMixin, TimestampMixin):
    """An entry in the author directory.

    Authors are not accounts. A user is linked to an author only when the
    two share an email address, compared case-insensitively; that link is
    what makes the user an owner of the author's articles.

    Attributes:
        name: Display name
        slug: Unique URL slug derived from the name
        email: Optional contact email, unique when set
        bio: Short biography
    """

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    email: Mapped[str | None] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=True,
        unique=True,
        index=True,
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, slug={self.slug})>"
