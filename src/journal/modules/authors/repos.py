"""Author repository for database operations."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, select

from journal.api.dependencies import DBSession
from journal.core.utils.text import normalize_email
from journal.modules.authors.models import Author


class AuthorRepository:
    """Repository for Author database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, author: Author) -> Author:
        self.session.add(author)
        await self.session.flush()
        await self.session.refresh(author)
        return author

    async def get_by_id(self, author_id: UUID) -> Author | None:
        result = await self.session.execute(select(Author).where(Author.id == author_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, author_ids: Iterable[UUID]) -> list[Author]:
        """Fetch the authors whose ids are in ``author_ids``, in no particular order."""
        wanted = set(author_ids)
        if not wanted:
            return []
        result = await self.session.execute(select(Author).where(Author.id.in_(wanted)))
        return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> Author | None:
        result = await self.session.execute(select(Author).where(Author.slug == slug))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Author | None:
        """Get an author by email, ignoring case."""
        normalized = normalize_email(email)
        if normalized is None:
            return None
        result = await self.session.execute(
            select(Author).where(func.lower(Author.email) == normalized)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Author]:
        result = await self.session.execute(select(Author).order_by(Author.name))
        return list(result.scalars().all())

    async def count_articles(self, author_id: UUID) -> int:
        """Number of articles listing the author."""
        from journal.modules.articles.models import ArticleAuthor  # noqa: PLC0415

        stmt = (
            select(func.count())
            .select_from(ArticleAuthor)
            .where(ArticleAuthor.author_id == author_id)
        )
        return (await self.session.scalar(stmt)) or 0

    async def update(self, author: Author) -> Author:
        await self.session.flush()
        await self.session.refresh(author)
        return author

    async def delete(self, author: Author) -> None:
        await self.session.delete(author)
        await self.session.flush()
