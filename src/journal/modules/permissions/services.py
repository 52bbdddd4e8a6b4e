"""Permission catalog service.

Every mutation here changes the set of valid keys, so each successful
one invalidates the process-wide catalog cache when its transaction
commits.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import DBSession
from journal.core.errors import ConflictError, NotFoundError, ValidationError
from journal.core.permissions.catalog import (
    DEFAULT_PERMISSIONS,
    PermissionDefinition,
    catalog_cache,
)
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.permissions.models import Permission
from journal.modules.permissions.repos import PermissionRepository
from journal.modules.permissions.schemas import (
    PermissionCreate,
    PermissionResponse,
    PermissionSyncResponse,
    PermissionUpdate,
    PermissionWithStats,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()


async def resolve_permission_keys(
    repo: PermissionRepository,
    keys: Iterable[str],
    field: str = "permissions",
) -> list[Permission]:
    """Load the catalog entries for ``keys``.

    Raises:
        ValidationError: If any key is not in the catalog
    """
    wanted = sorted(set(keys))
    permissions = await repo.get_by_keys(wanted)
    missing = sorted(set(wanted) - {permission.key for permission in permissions})
    if missing:
        raise ValidationError(
            f"Unknown permission keys: {', '.join(missing)}",
            errors=[
                {"field": field, "message": f"{key} is not a defined permission"}
                for key in missing
            ],
        )
    return permissions


async def sync_default_permissions(
    session: AsyncSession,
    definitions: Iterable[PermissionDefinition] = DEFAULT_PERMISSIONS,
) -> list[str]:
    """Insert any missing default permissions.

    Existing entries are left untouched, so descriptions edited by an
    administrator survive a sync.

    Returns:
        Keys that were created, sorted
    """
    repo = PermissionRepository(session)
    existing = {permission.key for permission in await repo.list_all()}

    created: list[str] = []
    for definition in definitions:
        if definition.key in existing:
            continue
        session.add(Permission(key=definition.key, description=definition.description))
        created.append(definition.key)

    if created:
        await session.flush()
        logger.info("permissions_synced", created=len(created))
    catalog_cache.invalidate_on_commit(session)
    return sorted(created)


def _with_stats(permission: Permission, counts: tuple[int, int]) -> PermissionWithStats:
    role_count, user_count = counts
    return PermissionWithStats.model_validate(permission).model_copy(
        update={
            "role_count": role_count,
            "user_count": user_count,
            "total_assignments": role_count + user_count,
        }
    )


class PermissionService:
    """Service for catalog management."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = PermissionRepository(db)

    async def list_permissions(self) -> list[PermissionWithStats]:
        """List the catalog with assignment counts."""
        permissions = await self.repo.list_all()
        counts = await self.repo.assignment_counts()
        return [_with_stats(p, counts.get(p.id, (0, 0))) for p in permissions]

    async def _get_permission(self, permission_id: UUID) -> Permission:
        permission = await self.repo.get_by_id(permission_id)
        if not permission:
            raise NotFoundError(
                "Permission not found",
                resource="permission",
                resource_id=str(permission_id),
            )
        return permission

    async def _ensure_key_available(self, key: str) -> None:
        if await self.repo.get_by_key(key):
            raise ConflictError(
                f"Permission {key} already exists",
                error_code="permission_exists",
                details={"key": key},
            )

    async def create_permission(
        self, actor: "User | None", data: PermissionCreate
    ) -> ActionResult[Any]:
        """Add a key to the catalog."""

        async def handler() -> PermissionResponse:
            await self.gateway.authorize(actor, "permission.CREATE")
            await self._ensure_key_available(data.key)
            permission = await self.repo.create(
                Permission(key=data.key, description=data.description)
            )
            logger.info("permission_created", key=permission.key)
            return PermissionResponse.model_validate(permission)

        result = await self.gateway.run("permission.create", handler)
        if result.success:
            catalog_cache.invalidate_on_commit(self.db)
        return result

    async def update_permission(
        self, actor: "User | None", permission_id: UUID, data: PermissionUpdate
    ) -> ActionResult[Any]:
        """Edit a catalog entry's key or description."""

        async def handler() -> PermissionResponse:
            await self.gateway.authorize(actor, "permission.UPDATE")
            permission = await self._get_permission(permission_id)

            if data.key is not None and data.key != permission.key:
                await self._ensure_key_available(data.key)
                permission.key = data.key
            if data.description is not None:
                permission.description = data.description

            permission = await self.repo.update(permission)
            logger.info("permission_updated", key=permission.key)
            return PermissionResponse.model_validate(permission)

        result = await self.gateway.run("permission.update", handler)
        if result.success:
            catalog_cache.invalidate_on_commit(self.db)
        return result

    async def delete_permission(
        self, actor: "User | None", permission_id: UUID
    ) -> ActionResult[Any]:
        """Remove a catalog entry that nothing references."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "permission.DELETE")
            permission = await self._get_permission(permission_id)

            role_count, user_count = await self.repo.count_assignments(permission.id)
            total = role_count + user_count
            if total > 0:
                raise ConflictError(
                    f"Cannot delete permission {permission.key}: it is assigned "
                    f"{total} time(s) ({role_count} role(s), {user_count} user(s))",
                    error_code="permission_in_use",
                    details={
                        "role_count": role_count,
                        "user_count": user_count,
                        "total_assignments": total,
                    },
                )

            await self.repo.delete(permission)
            logger.info("permission_deleted", key=permission.key)

        result = await self.gateway.run("permission.delete", handler)
        if result.success:
            catalog_cache.invalidate_on_commit(self.db)
        return result

    async def sync_permissions(self, actor: "User | None") -> ActionResult[Any]:
        """Add any missing default permissions to the catalog."""

        async def handler() -> PermissionSyncResponse:
            await self.gateway.authorize(actor, "permission.CREATE")
            created = await sync_default_permissions(self.db)
            return PermissionSyncResponse(
                created=created,
                total=len(await self.repo.list_all()),
            )

        return await self.gateway.run("permission.sync", handler)


# Type alias for dependency injection
PermissionSvc = Annotated[PermissionService, Depends(PermissionService)]
