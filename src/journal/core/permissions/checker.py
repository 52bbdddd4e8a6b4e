"""Permission checking logic.

``PermissionChecker.check`` is the single authorization decision point.
Given a user, a permission key and optionally the resource instance being
acted on, it returns a ``Decision``. Denials are ordinary return values;
the only exception it raises is ``InvalidPermissionKeyError`` for a
malformed key, which is a bug at the call site.

Evaluation order:
    1. No user: deny, "Authentication required"
    2. Super Admin role: allow
    3. Key not in the catalog: deny, "Unknown permission"
    4. Key granted by the role or by a direct override: allow
    5. Ownership-scoped key, context given, user owns the resource: allow
    6. Otherwise: deny
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Annotated

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import DBSession
from journal.core.permissions.catalog import (
    PermissionCatalog,
    catalog_cache,
    parse_permission_key,
)
from journal.core.permissions.hierarchy import is_super_admin
from journal.core.permissions.ownership import (
    OWNERSHIP_SCOPED_PERMISSIONS,
    OwnershipResolver,
)
from journal.core.permissions.schemas import (
    AUTHENTICATION_REQUIRED,
    PERMISSION_DENIED,
    UNKNOWN_PERMISSION,
    Decision,
    DenialCode,
    EffectivePermissions,
    GrantSource,
    ResourceOwnershipContext,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()


def role_permission_keys(user: "User") -> frozenset[str]:
    """Keys granted through the user's role."""
    if user.role is None:
        return frozenset()
    return user.role.permission_keys


def direct_permission_keys(user: "User") -> frozenset[str]:
    """Keys granted directly to the user, outside the role."""
    return frozenset(permission.key for permission in user.direct_permissions)


class PermissionChecker:
    """Evaluates permission checks against the catalog and a user's grants.

    The checker holds no per-request state. It reads only the catalog it
    was built with and, for ownership-scoped keys, the ownership resolver.
    """

    def __init__(
        self,
        catalog: PermissionCatalog,
        ownership: OwnershipResolver | None = None,
    ) -> None:
        self.catalog = catalog
        self.ownership = ownership

    async def check(
        self,
        user: "User | None",
        permission_key: str,
        context: ResourceOwnershipContext | None = None,
    ) -> Decision:
        """Decide whether ``user`` may perform ``permission_key``.

        Args:
            user: The requesting user, or None if unauthenticated
            permission_key: Key such as "article.UPDATE"
            context: The resource instance, for ownership-scoped keys

        Returns:
            The decision; denials carry a reason

        Raises:
            InvalidPermissionKeyError: If ``permission_key`` is malformed
        """
        if user is None:
            return Decision.deny(AUTHENTICATION_REQUIRED, DenialCode.AUTH_REQUIRED)

        if is_super_admin(user):
            return Decision.allow(GrantSource.SUPER_ADMIN)

        parsed = parse_permission_key(permission_key)

        if permission_key not in self.catalog:
            logger.warning(
                "unknown_permission_key",
                permission=permission_key,
                user_id=str(user.id),
            )
            return Decision.deny(UNKNOWN_PERMISSION, DenialCode.UNKNOWN_PERMISSION)

        if permission_key in role_permission_keys(user):
            return Decision.allow(GrantSource.ROLE)

        if permission_key in direct_permission_keys(user):
            return Decision.allow(GrantSource.OVERRIDE)

        if (
            permission_key in OWNERSHIP_SCOPED_PERMISSIONS
            and context is not None
            and context.resource_type == parsed.resource
            and self.ownership is not None
            and await self.ownership.is_owner(
                user, context.resource_type, context.resource_id
            )
        ):
            logger.debug(
                "ownership_grant",
                permission=permission_key,
                user_id=str(user.id),
                resource_id=context.resource_id,
            )
            return Decision.allow(GrantSource.OWNER)

        return Decision.deny(PERMISSION_DENIED, DenialCode.PERMISSION_DENIED)

    async def check_all(
        self,
        user: "User | None",
        permission_keys: Sequence[str],
        context: ResourceOwnershipContext | None = None,
    ) -> Decision:
        """Allow only if every key is allowed; return the first denial otherwise.

        An empty list is allowed.
        """
        decision = Decision.allow(GrantSource.ROLE)
        for key in permission_keys:
            decision = await self.check(user, key, context)
            if not decision.allowed:
                return decision
        return decision

    async def check_any(
        self,
        user: "User | None",
        permission_keys: Sequence[str],
        context: ResourceOwnershipContext | None = None,
    ) -> Decision:
        """Allow if at least one key is allowed.

        An empty list is denied.
        """
        if user is None:
            return Decision.deny(AUTHENTICATION_REQUIRED, DenialCode.AUTH_REQUIRED)

        for key in permission_keys:
            decision = await self.check(user, key, context)
            if decision.allowed:
                return decision
        return Decision.deny(PERMISSION_DENIED, DenialCode.PERMISSION_DENIED)

    def effective_permissions(self, user: "User") -> EffectivePermissions:
        """Return the user's grants split by source.

        Super Admin is reported as holding the whole catalog.
        """
        role_keys = role_permission_keys(user)
        direct_keys = direct_permission_keys(user)
        super_admin = is_super_admin(user)
        combined = set(self.catalog) if super_admin else role_keys | direct_keys
        return EffectivePermissions(
            role=sorted(role_keys),
            direct=sorted(direct_keys),
            all=sorted(combined),
            is_super_admin=super_admin,
        )


async def build_permission_checker(session: AsyncSession) -> PermissionChecker:
    """Build a checker over the cached catalog and an article ownership resolver."""
    from journal.modules.articles.repos import ArticleRepository  # noqa: PLC0415

    catalog = await catalog_cache.get(session)
    return PermissionChecker(catalog, OwnershipResolver(ArticleRepository(session)))


async def get_permission_checker(db: DBSession) -> PermissionChecker:
    """FastAPI dependency providing a request-scoped checker."""
    return await build_permission_checker(db)


Checker = Annotated[PermissionChecker, Depends(get_permission_checker)]


async def check_permission(
    user: "User | None",
    permission_key: str,
    session: AsyncSession,
    context: ResourceOwnershipContext | None = None,
) -> Decision:
    """Convenience function for a one-off check outside dependency injection."""
    checker = await build_permission_checker(session)
    return await checker.check(user, permission_key, context)
