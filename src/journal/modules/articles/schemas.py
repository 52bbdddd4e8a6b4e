"""Pydantic schemas for article operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.core.constants import MAX_TITLE_LENGTH
from journal.modules.articles.models import ArticleType


def _unique_ids(author_ids: list[UUID]) -> list[UUID]:
    if len(set(author_ids)) != len(author_ids):
        raise ValueError("An author can only appear once in a byline")
    return author_ids


class ArticleCreate(BaseModel):
    """Schema for creating an article.

    ``author_ids`` is the byline in order.
    """

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    type: ArticleType = ArticleType.BLOG
    content: str = ""
    author_ids: list[UUID] = Field(..., min_length=1)

    @field_validator("author_ids")
    @classmethod
    def distinct_authors(cls, v: list[UUID]) -> list[UUID]:
        return _unique_ids(v)


class ArticleUpdate(BaseModel):
    """Schema for updating an article. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    type: ArticleType | None = None
    content: str | None = None
    author_ids: list[UUID] | None = Field(None, min_length=1)

    @field_validator("author_ids")
    @classmethod
    def distinct_authors(cls, v: list[UUID] | None) -> list[UUID] | None:
        return v if v is None else _unique_ids(v)


class ArticleAuthorResponse(BaseModel):
    """An author as shown in an article's byline."""

    id: UUID
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class ArticleResponse(BaseModel):
    """Schema for article response data."""

    id: UUID
    title: str
    slug: str
    type: ArticleType
    content: str
    authors: list[ArticleAuthorResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleListResponse(BaseModel):
    """Schema for listing articles."""

    items: list[ArticleResponse]
    total: int
