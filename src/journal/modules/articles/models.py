"""Article database models."""

from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.constants import MAX_SLUG_LENGTH, MAX_TITLE_LENGTH
from journal.core.database.base import Base, TimestampMixin, UUIDMixin
from journal.modules.authors.models import Author


class ArticleType(str, Enum):
    """Kinds of article published on the site."""

    BLOG = "blog"
    JOURNAL = "journal"


class ArticleAuthor(Base):
    """Link between an article and one of its authors.

    Attributes:
        position: Zero-based place in the article's byline
    """

    __tablename__ = "article_authors"

    article_id: Mapped[UUID] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    author_id: Mapped[UUID] = mapped_column(
        ForeignKey("authors.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    author: Mapped[Author] = relationship(
        Author,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ArticleAuthor(article_id={self.article_id}, author_id={self.author_id})>"


class Article(Base, UUIDMixin, TimestampMixin):
    """A blog post or journal paper.

    Attributes:
        title: Article title
        slug: Unique URL slug derived from the title
        type: "blog" or "journal"
        content: Article body
        author_links: Byline entries ordered by position
    """

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    type: Mapped[str] = mapped_column(
        String(20),
        default=ArticleType.BLOG.value,
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )

    author_links: Mapped[list[ArticleAuthor]] = relationship(
        ArticleAuthor,
        order_by=ArticleAuthor.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def authors(self) -> list[Author]:
        """Authors in byline order."""
        return [link.author for link in self.author_links]

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug={self.slug})>"
