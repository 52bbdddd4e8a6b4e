"""Article repository for database operations."""

from uuid import UUID

from sqlalchemy import exists, func, select

from journal.api.dependencies import DBSession
from journal.modules.articles.models import Article, ArticleAuthor
from journal.modules.authors.models import Author


class ArticleRepository:
    """Repository for Article database operations.

    Also serves as the authorship source for the ownership resolver.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, article: Article) -> Article:
        """Create a new article.

        Args:
            article: Article instance to create, with its author links

        Returns:
            The created article with ID populated
        """
        self.session.add(article)
        await self.session.flush()
        await self.session.refresh(article)
        return article

    async def get_by_id(self, article_id: UUID) -> Article | None:
        result = await self.session.execute(select(Article).where(Article.id == article_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Article | None:
        result = await self.session.execute(select(Article).where(Article.slug == slug))
        return result.scalar_one_or_none()

    async def list_all(self, article_type: str | None = None) -> list[Article]:
        """List articles, newest first, optionally filtered by type."""
        stmt = select(Article).order_by(Article.created_at.desc(), Article.title)
        if article_type:
            stmt = stmt.where(Article.type == article_type)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_author_with_email(self, article_id: UUID, email: str) -> bool:
        """True if the article lists an author whose email matches, ignoring case.

        Args:
            article_id: The article's UUID
            email: Lowercased email to look for

        Returns:
            False when the article does not exist or no author matches
        """
        stmt = select(
            exists()
            .where(ArticleAuthor.article_id == article_id)
            .where(ArticleAuthor.author_id == Author.id)
            .where(func.lower(Author.email) == email)
        )
        return bool(await self.session.scalar(stmt))

    async def update(self, article: Article) -> Article:
        await self.session.flush()
        await self.session.refresh(article)
        return article

    async def delete(self, article: Article) -> None:
        await self.session.delete(article)
        await self.session.flush()
