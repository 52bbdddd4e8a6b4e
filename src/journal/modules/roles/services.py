"""Role management service."""

from typing import TYPE_CHECKING, Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import DBSession
from journal.core.errors import ConflictError, NotFoundError
from journal.core.permissions.catalog import DEFAULT_ROLE_DESCRIPTIONS, DEFAULT_ROLE_GRANTS
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.permissions.hierarchy import SUPER_ADMIN_ROLE
from journal.core.permissions.models import Role
from journal.modules.permissions.repos import PermissionRepository
from journal.modules.permissions.services import resolve_permission_keys
from journal.modules.roles.repos import RoleRepository
from journal.modules.roles.schemas import RoleCreate, RoleResponse, RoleUpdate, RoleWithStats


if TYPE_CHECKING:
    from journal.modules.users.models import User


logger = structlog.get_logger()


async def seed_default_roles(session: AsyncSession) -> list[str]:
    """Create the default roles that do not exist yet.

    Super Admin is created as a system role with no grants; it passes
    every check by name. Existing roles are left untouched. Grants naming
    keys missing from the catalog are skipped, so run the permission sync
    first.

    Returns:
        Names of the roles that were created
    """
    role_repo = RoleRepository(session)
    permission_repo = PermissionRepository(session)

    created: list[str] = []
    if await role_repo.get_by_name(SUPER_ADMIN_ROLE) is None:
        await role_repo.create(
            Role(
                name=SUPER_ADMIN_ROLE,
                description=DEFAULT_ROLE_DESCRIPTIONS[SUPER_ADMIN_ROLE],
                is_system=True,
            )
        )
        created.append(SUPER_ADMIN_ROLE)

    for name, keys in DEFAULT_ROLE_GRANTS.items():
        if await role_repo.get_by_name(name) is not None:
            continue
        permissions = await permission_repo.get_by_keys(keys)
        skipped = sorted(set(keys) - {permission.key for permission in permissions})
        if skipped:
            logger.warning("role_seed_missing_permissions", role=name, keys=skipped)
        await role_repo.create(
            Role(
                name=name,
                description=DEFAULT_ROLE_DESCRIPTIONS.get(name),
                permissions=permissions,
            )
        )
        created.append(name)

    if created:
        logger.info("roles_seeded", roles=created)
    return created


class RoleService:
    """Service for role management."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = RoleRepository(db)
        self.permission_repo = PermissionRepository(db)

    async def list_roles(self) -> list[RoleWithStats]:
        """List roles with the number of users holding each."""
        roles = await self.repo.list_all()
        counts = await self.repo.user_counts()
        return [
            RoleWithStats.model_validate(role).model_copy(
                update={"user_count": counts.get(role.id, 0)}
            )
            for role in roles
        ]

    async def _get_role(self, role_id: UUID) -> Role:
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
        return role

    async def _ensure_name_available(self, name: str) -> None:
        if await self.repo.get_by_name(name):
            raise ConflictError(
                f"A role named {name} already exists",
                error_code="role_exists",
                details={"name": name},
            )

    async def create_role(self, actor: "User | None", data: RoleCreate) -> ActionResult[Any]:
        """Create a custom role with the given grants."""

        async def handler() -> RoleResponse:
            await self.gateway.authorize(actor, "role.CREATE")
            await self._ensure_name_available(data.name)
            permissions = await resolve_permission_keys(self.permission_repo, data.permissions)
            role = await self.repo.create(
                Role(name=data.name, description=data.description, permissions=permissions)
            )
            logger.info("role_created", role=role.name, permissions=len(permissions))
            return RoleResponse.model_validate(role)

        return await self.gateway.run("role.create", handler)

    async def update_role(
        self, actor: "User | None", role_id: UUID, data: RoleUpdate
    ) -> ActionResult[Any]:
        """Rename a role, edit its description or replace its grants."""

        async def handler() -> RoleResponse:
            await self.gateway.authorize(actor, "role.UPDATE")
            role = await self._get_role(role_id)

            if data.name is not None and data.name != role.name:
                if role.is_system:
                    raise ConflictError(
                        "System roles cannot be renamed",
                        error_code="system_role",
                    )
                await self._ensure_name_available(data.name)
                role.name = data.name
            if data.description is not None:
                role.description = data.description
            if data.permissions is not None:
                role.permissions = await resolve_permission_keys(
                    self.permission_repo, data.permissions
                )

            role = await self.repo.update(role)
            logger.info("role_updated", role=role.name)
            return RoleResponse.model_validate(role)

        return await self.gateway.run("role.update", handler)

    async def delete_role(self, actor: "User | None", role_id: UUID) -> ActionResult[Any]:
        """Delete a custom role nobody holds."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "role.DELETE")
            role = await self._get_role(role_id)

            if role.is_system:
                raise ConflictError(
                    "System roles cannot be deleted",
                    error_code="system_role",
                )
            user_count = await self.repo.count_users(role.id)
            if user_count > 0:
                raise ConflictError(
                    f"Cannot delete role {role.name}: it is assigned to {user_count} user(s)",
                    error_code="role_in_use",
                    details={"user_count": user_count},
                )

            await self.repo.delete(role)
            logger.info("role_deleted", role=role.name)

        return await self.gateway.run("role.delete", handler)


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
