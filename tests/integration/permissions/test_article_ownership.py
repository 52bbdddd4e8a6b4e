"""Integration tests for article ownership resolved through the database."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from journal.core.permissions.checker import build_permission_checker
from journal.core.permissions.ownership import OwnershipResolver
from journal.core.permissions.schemas import GrantSource
from journal.modules.articles.models import Article, ArticleAuthor
from journal.modules.articles.repos import ArticleRepository
from journal.modules.articles.services import article_context
from journal.modules.authors.models import Author
from journal.modules.users.models import User


pytestmark = pytest.mark.integration


async def create_article(db: AsyncSession, *authors: Author, slug: str = "field-notes") -> Article:
    article = Article(
        title="Field Notes",
        slug=slug,
        type="journal",
        content="",
        author_links=[
            ArticleAuthor(author=author, position=position)
            for position, author in enumerate(authors)
        ],
    )
    return await ArticleRepository(db).create(article)


@pytest.fixture
async def ada(db: AsyncSession) -> Author:
    author = Author(name="Ada Lovelace", slug="ada-lovelace", email="Ada@Example.com")
    db.add(author)
    await db.flush()
    return author


@pytest.fixture
async def grace(db: AsyncSession) -> Author:
    author = Author(name="Grace Hopper", slug="grace-hopper", email="grace@example.com")
    db.add(author)
    await db.flush()
    return author


class TestArticleOwnership:
    """Ownership is decided by author email, in any byline position."""

    async def test_listed_author_owns_article(
        self, db: AsyncSession, author_user: User, ada: Author, grace: Author
    ):
        article = await create_article(db, grace, ada)
        resolver = OwnershipResolver(ArticleRepository(db))

        assert await resolver.is_owner(author_user, "article", str(article.id)) is True

    async def test_other_article_not_owned(
        self, db: AsyncSession, author_user: User, ada: Author, grace: Author
    ):
        await create_article(db, ada, slug="ada-article")
        article = await create_article(db, grace, slug="grace-article")
        resolver = OwnershipResolver(ArticleRepository(db))

        assert await resolver.is_owner(author_user, "article", str(article.id)) is False

    async def test_missing_article_not_owned(self, db: AsyncSession, author_user: User):
        resolver = OwnershipResolver(ArticleRepository(db))

        assert (
            await resolver.is_owner(author_user, "article", "6f1d2f8e-9c1a-4c55-8d31-1b0f5e0c2a77")
            is False
        )

    async def test_checker_grants_update_to_owner_only(
        self,
        db: AsyncSession,
        author_user: User,
        viewer: User,
        ada: Author,
    ):
        article = await create_article(db, ada)
        checker = await build_permission_checker(db)
        context = article_context(article.id)

        owner_decision = await checker.check(author_user, "article.UPDATE", context)
        viewer_decision = await checker.check(viewer, "article.UPDATE", context)

        assert owner_decision.granted_by == GrantSource.OWNER
        assert viewer_decision.allowed is False

    async def test_removing_author_revokes_ownership(
        self,
        db: AsyncSession,
        author_user: User,
        ada: Author,
        grace: Author,
    ):
        article = await create_article(db, ada, grace)
        resolver = OwnershipResolver(ArticleRepository(db))
        assert await resolver.is_owner(author_user, "article", str(article.id)) is True

        article.author_links = [link for link in article.author_links if link.author_id != ada.id]
        await ArticleRepository(db).update(article)

        assert await resolver.is_owner(author_user, "article", str(article.id)) is False

    async def test_owner_check_repeats_against_the_store(
        self, db: AsyncSession, author_user: User, ada: Author
    ):
        article = await create_article(db, ada)
        checker = await build_permission_checker(db)
        context = article_context(article.id)

        first = await checker.check(author_user, "article.DELETE", context)
        second = await checker.check(author_user, "article.DELETE", context)

        assert first == second
        assert first.granted_by == GrantSource.OWNER
