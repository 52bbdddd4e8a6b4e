"""Unit tests for the ownership resolver."""

from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from journal.core.permissions.ownership import OWNERSHIP_SCOPED_PERMISSIONS, OwnershipResolver
from tests.factories.user import build_user


pytestmark = pytest.mark.unit


@pytest.fixture
def authorship() -> AsyncMock:
    repo = AsyncMock()
    repo.has_author_with_email.return_value = True
    return repo


@pytest.fixture
def resolver(authorship: AsyncMock) -> OwnershipResolver:
    return OwnershipResolver(authorship)


class TestOwnershipResolver:
    """Tests for OwnershipResolver.is_owner."""

    async def test_matches_on_normalized_email(
        self, resolver: OwnershipResolver, authorship: AsyncMock
    ):
        article_id = uuid4()
        user = build_user("Author", email="  Ada@Example.COM ")

        assert await resolver.is_owner(user, "article", str(article_id)) is True
        authorship.has_author_with_email.assert_awaited_once_with(article_id, "ada@example.com")

    async def test_not_listed(self, resolver: OwnershipResolver, authorship: AsyncMock):
        authorship.has_author_with_email.return_value = False

        assert await resolver.is_owner(build_user(), "article", str(uuid4())) is False

    async def test_no_user(self, resolver: OwnershipResolver, authorship: AsyncMock):
        assert await resolver.is_owner(None, "article", str(uuid4())) is False
        authorship.has_author_with_email.assert_not_awaited()

    @pytest.mark.parametrize("resource_type", ["author", "notification", "callforpapers", "user"])
    async def test_other_resource_types_never_owned(
        self, resolver: OwnershipResolver, authorship: AsyncMock, resource_type: str
    ):
        assert await resolver.is_owner(build_user(), resource_type, str(uuid4())) is False
        authorship.has_author_with_email.assert_not_awaited()

    async def test_malformed_resource_id(self, resolver: OwnershipResolver, authorship: AsyncMock):
        assert await resolver.is_owner(build_user(), "article", "not-a-uuid") is False
        authorship.has_author_with_email.assert_not_awaited()

    async def test_blank_email_never_owns(self, resolver: OwnershipResolver):
        user = build_user(email="   ")

        assert await resolver.is_owner(user, "article", str(UUID(int=1))) is False


def test_scoped_permissions_exclude_administrative_deletes():
    assert OWNERSHIP_SCOPED_PERMISSIONS == {"article.UPDATE", "article.DELETE"}
    for key in ("user.DELETE", "role.DELETE", "permission.DELETE"):
        assert key not in OWNERSHIP_SCOPED_PERMISSIONS
