"""Article service.

Updates and deletes are ownership-scoped: an author listed on an article
may edit or remove it without holding ``article.UPDATE`` or
``article.DELETE``, so those checks pass the article as context.
"""

from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.errors import NotFoundError, ValidationError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.permissions.schemas import ResourceOwnershipContext
from journal.core.utils.text import unique_slug
from journal.modules.articles.models import Article, ArticleAuthor
from journal.modules.articles.repos import ArticleRepository
from journal.modules.articles.schemas import ArticleCreate, ArticleResponse, ArticleUpdate
from journal.modules.authors.models import Author
from journal.modules.authors.repos import AuthorRepository


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()


def article_context(article_id: UUID) -> ResourceOwnershipContext:
    """Ownership context for a permission check on one article."""
    return ResourceOwnershipContext(resource_type="article", resource_id=str(article_id))


class ArticleService:
    """Service for article management."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = ArticleRepository(db)
        self.author_repo = AuthorRepository(db)

    async def list_articles(self, article_type: str | None = None) -> list[Article]:
        return await self.repo.list_all(article_type)

    async def _get_article(self, article_id: UUID) -> Article:
        article = await self.repo.get_by_id(article_id)
        if not article:
            raise NotFoundError(
                "Article not found",
                resource="article",
                resource_id=str(article_id),
            )
        return article

    async def _get_authors(self, author_ids: list[UUID]) -> list[Author]:
        """Load authors in the order given.

        Raises:
            ValidationError: If any id does not match an author
        """
        found = {author.id: author for author in await self.author_repo.get_by_ids(author_ids)}
        missing = [author_id for author_id in author_ids if author_id not in found]
        if missing:
            raise ValidationError(
                "Unknown authors",
                errors=[
                    {"field": "author_ids", "message": f"No author with id {author_id}"}
                    for author_id in missing
                ],
            )
        return [found[author_id] for author_id in author_ids]

    async def _slug_taken(self, slug: str, article_id: UUID | None = None) -> bool:
        existing = await self.repo.get_by_slug(slug)
        return existing is not None and existing.id != article_id

    @staticmethod
    def _set_byline(article: Article, authors: list[Author]) -> None:
        """Make ``authors`` the article's byline, reusing existing links."""
        links = {link.author_id: link for link in article.author_links}
        byline: list[ArticleAuthor] = []
        for position, author in enumerate(authors):
            link = links.get(author.id) or ArticleAuthor(author=author, author_id=author.id)
            link.position = position
            byline.append(link)
        article.author_links = byline

    async def create_article(self, actor: "User | None", data: ArticleCreate) -> ActionResult[Any]:
        """Create an article with its byline."""

        async def handler() -> ArticleResponse:
            await self.gateway.authorize(actor, "article.CREATE")
            authors = await self._get_authors(data.author_ids)

            article = Article(
                title=data.title,
                slug=await unique_slug(data.title, self._slug_taken),
                type=data.type.value,
                content=data.content,
            )
            self._set_byline(article, authors)
            article = await self.repo.create(article)

            logger.info(
                "article_created",
                article_id=str(article.id),
                slug=article.slug,
                authors=len(authors),
            )
            return ArticleResponse.model_validate(article)

        return await self.gateway.run("article.create", handler)

    async def update_article(
        self, actor: "User | None", article_id: UUID, data: ArticleUpdate
    ) -> ActionResult[Any]:
        """Update an article. Listed authors may update their own articles."""

        async def handler() -> ArticleResponse:
            self.gateway.require_user(actor)
            article = await self._get_article(article_id)
            await self.gateway.authorize(actor, "article.UPDATE", article_context(article.id))

            if data.title is not None and data.title != article.title:
                article.title = data.title
                article.slug = await unique_slug(
                    data.title, lambda slug: self._slug_taken(slug, article.id)
                )
            if data.type is not None:
                article.type = data.type.value
            if data.content is not None:
                article.content = data.content
            if data.author_ids is not None:
                self._set_byline(article, await self._get_authors(data.author_ids))

            article = await self.repo.update(article)
            logger.info("article_updated", article_id=str(article.id))
            return ArticleResponse.model_validate(article)

        return await self.gateway.run("article.update", handler)

    async def delete_article(self, actor: "User | None", article_id: UUID) -> ActionResult[Any]:
        """Delete an article. Listed authors may delete their own articles."""

        async def handler() -> None:
            self.gateway.require_user(actor)
            article = await self._get_article(article_id)
            await self.gateway.authorize(actor, "article.DELETE", article_context(article.id))

            await self.repo.delete(article)
            logger.info("article_deleted", article_id=str(article_id))

        return await self.gateway.run("article.delete", handler)


# Type alias for dependency injection
ArticleSvc = Annotated[ArticleService, Depends(ArticleService)]
