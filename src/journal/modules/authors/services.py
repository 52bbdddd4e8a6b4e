"""Author directory service."""

from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.errors import ConflictError, NotFoundError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.utils.text import normalize_email, unique_slug
from journal.modules.authors.models import Author
from journal.modules.authors.repos import AuthorRepository
from journal.modules.authors.schemas import AuthorCreate, AuthorResponse, AuthorUpdate


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()


class AuthorService:
    """Service for managing the author directory."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = AuthorRepository(db)

    async def list_authors(self) -> list[Author]:
        return await self.repo.list_all()

    async def _get_author(self, author_id: UUID) -> Author:
        author = await self.repo.get_by_id(author_id)
        if not author:
            raise NotFoundError("Author not found", resource="author", resource_id=str(author_id))
        return author

    async def _slug_taken(self, slug: str, author_id: UUID | None = None) -> bool:
        existing = await self.repo.get_by_slug(slug)
        return existing is not None and existing.id != author_id

    async def _ensure_email_available(self, email: str, author_id: UUID | None = None) -> None:
        existing = await self.repo.get_by_email(email)
        if existing and existing.id != author_id:
            raise ConflictError(
                "Another author already uses this email",
                error_code="author_email_exists",
                details={"email": email},
            )

    async def create_author(self, actor: "User | None", data: AuthorCreate) -> ActionResult[Any]:
        """Add an author to the directory."""

        async def handler() -> AuthorResponse:
            await self.gateway.authorize(actor, "author.CREATE")
            email = normalize_email(data.email)
            if email:
                await self._ensure_email_available(email)

            author = await self.repo.create(
                Author(
                    name=data.name,
                    slug=await unique_slug(data.name, self._slug_taken),
                    email=email,
                    bio=data.bio,
                )
            )
            logger.info("author_created", author_id=str(author.id), slug=author.slug)
            return AuthorResponse.model_validate(author)

        return await self.gateway.run("author.create", handler)

    async def update_author(
        self, actor: "User | None", author_id: UUID, data: AuthorUpdate
    ) -> ActionResult[Any]:
        """Edit an author's details. Changing the name regenerates the slug."""

        async def handler() -> AuthorResponse:
            await self.gateway.authorize(actor, "author.UPDATE")
            author = await self._get_author(author_id)

            if data.name is not None and data.name != author.name:
                author.name = data.name
                author.slug = await unique_slug(
                    data.name, lambda slug: self._slug_taken(slug, author.id)
                )
            if "email" in data.model_fields_set:
                email = normalize_email(data.email)
                if email:
                    await self._ensure_email_available(email, author.id)
                author.email = email
            if data.bio is not None:
                author.bio = data.bio

            author = await self.repo.update(author)
            logger.info("author_updated", author_id=str(author.id))
            return AuthorResponse.model_validate(author)

        return await self.gateway.run("author.update", handler)

    async def delete_author(self, actor: "User | None", author_id: UUID) -> ActionResult[Any]:
        """Remove an author who is not on any article's byline."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "author.DELETE")
            author = await self._get_author(author_id)

            article_count = await self.repo.count_articles(author.id)
            if article_count > 0:
                raise ConflictError(
                    f"Cannot delete {author.name}: listed on {article_count} article(s)",
                    error_code="author_in_use",
                    details={"article_count": article_count},
                )

            await self.repo.delete(author)
            logger.info("author_deleted", author_id=str(author_id))

        return await self.gateway.run("author.delete", handler)


# Type alias for dependency injection
AuthorSvc = Annotated[AuthorService, Depends(AuthorService)]
