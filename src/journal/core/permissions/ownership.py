"""Resource ownership resolution for ownership-scoped permissions.

Only articles have an owner concept: a user owns an article when an author
with the user's email appears anywhere in the article's author list. Other
resource types are blanket-permission-only and never resolve as owned.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

import structlog

from journal.core.utils.text import normalize_email


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()

# Permissions that an owner of the resource holds even without a role grant.
# Administrative deletes (user.DELETE, permission.DELETE, ...) must never be
# added here.
OWNERSHIP_SCOPED_PERMISSIONS: frozenset[str] = frozenset(
    {
        "article.UPDATE",
        "article.DELETE",
    }
)


class AuthorshipRepository(Protocol):
    """Read-only view of article authorship used by the resolver."""

    async def has_author_with_email(self, article_id: UUID, email: str) -> bool:
        """True if the article exists and lists an author with ``email``."""
        ...


class OwnershipResolver:
    """Decides whether a user owns a specific resource instance."""

    def __init__(self, authorship: AuthorshipRepository) -> None:
        self.authorship = authorship

    async def is_owner(
        self,
        user: "User | None",
        resource_type: str,
        resource_id: str,
    ) -> bool:
        """Check ownership, failing closed on anything unexpected in the input.

        Args:
            user: The requesting user
            resource_type: Resource type, e.g. "article"
            resource_id: The resource's identifier as a string

        Returns:
            True only when ownership is positively confirmed
        """
        if user is None:
            return False

        if resource_type != "article":
            return False

        email = normalize_email(user.email)
        if email is None:
            return False

        try:
            article_id = UUID(str(resource_id))
        except ValueError:
            logger.debug(
                "ownership_invalid_resource_id",
                resource_type=resource_type,
                resource_id=resource_id,
            )
            return False

        return await self.authorship.has_author_with_email(article_id, email)
