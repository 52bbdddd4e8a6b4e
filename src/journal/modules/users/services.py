"""User management service.

Edits to other accounts pass two gates: the ``user.*`` permission check
and the role hierarchy rules (``can_manage_user`` for the target account,
``can_assign`` for any role being handed out).
"""

from collections.abc import Iterable
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from journal.api.dependencies import DBSession
from journal.core.auth.backend import hash_password
from journal.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from journal.core.permissions.gateway import ActionResult, Gateway
from journal.core.permissions.hierarchy import (
    assignable_roles,
    can_assign,
    can_grant_directly,
    can_manage_user,
    is_super_admin,
)
from journal.core.permissions.models import Role
from journal.core.utils.text import normalize_email
from journal.modules.permissions.repos import PermissionRepository
from journal.modules.permissions.services import resolve_permission_keys
from journal.modules.roles.repos import RoleRepository
from journal.modules.users.models import User
from journal.modules.users.repos import UserRepository
from journal.modules.users.schemas import (
    AssignableRoleResponse,
    UserCreate,
    UserPermissionsUpdate,
    UserResponse,
    UserUpdate,
)


logger = structlog.get_logger()


class UserService:
    """Service for user management operations."""

    def __init__(self, db: DBSession, gateway: Gateway) -> None:
        self.db = db
        self.gateway = gateway
        self.repo = UserRepository(db)
        self.role_repo = RoleRepository(db)
        self.permission_repo = PermissionRepository(db)

    async def list_users(self) -> list[User]:
        """List every user."""
        return await self.repo.list_all()

    async def assignable_roles(self, actor: User) -> list[AssignableRoleResponse]:
        """Roles ``actor`` may give to other users."""
        roles = await self.role_repo.list_all()
        return [AssignableRoleResponse.model_validate(r) for r in assignable_roles(actor, roles)]

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", resource="user", resource_id=str(user_id))
        return user

    async def _get_assignable_role(self, actor: User, role_id: UUID) -> Role:
        role = await self.role_repo.get_by_id(role_id)
        if not role:
            raise ValidationError(
                "Role does not exist",
                errors=[{"field": "role_id", "message": f"No role with id {role_id}"}],
            )
        if not can_assign(actor, role.name):
            raise ForbiddenError(
                f"You cannot assign the {role.name} role",
                details={"role": role.name},
            )
        return role

    async def _ensure_grantable(self, grantor: User, keys: Iterable[str]) -> None:
        """Reject override changes to keys ``grantor`` could not exercise.

        Outside Super Admin, every key granted or revoked must be one the
        grantor holds, and keys on administrative resources need Admin rank.
        """
        if is_super_admin(grantor):
            return

        refused: list[str] = []
        for key in sorted(set(keys)):
            if not can_grant_directly(grantor, key):
                refused.append(key)
                continue
            decision = await self.gateway.checker.check(grantor, key)
            if not decision.allowed:
                refused.append(key)

        if refused:
            raise ForbiddenError(
                f"You cannot grant or revoke these permissions: {', '.join(refused)}",
                details={"permissions": refused},
            )

    async def _ensure_email_available(self, email: str) -> None:
        if await self.repo.get_by_email(email):
            raise ConflictError(
                "Email already in use",
                error_code="email_exists",
                details={"email": email},
            )

    async def create_user(self, actor: User | None, data: UserCreate) -> ActionResult[Any]:
        """Create a user with a role the actor is allowed to assign."""

        async def handler() -> UserResponse:
            await self.gateway.authorize(actor, "user.CREATE")
            creator = self.gateway.require_user(actor)
            role = await self._get_assignable_role(creator, data.role_id)
            email = normalize_email(data.email) or data.email
            await self._ensure_email_available(email)
            permissions = await resolve_permission_keys(self.permission_repo, data.permissions)
            await self._ensure_grantable(creator, data.permissions)

            user = await self.repo.create(
                User(
                    email=email,
                    full_name=data.full_name,
                    password_hash=hash_password(data.password),
                    is_active=data.is_active,
                    role=role,
                    direct_permissions=permissions,
                )
            )
            logger.info("user_created", user_id=str(user.id), role=role.name)
            return UserResponse.model_validate(user)

        return await self.gateway.run("user.create", handler)

    async def update_user(
        self, actor: User | None, user_id: UUID, data: UserUpdate
    ) -> ActionResult[Any]:
        """Update another user's profile, role or status."""

        async def handler() -> UserResponse:
            await self.gateway.authorize(actor, "user.UPDATE")
            editor = self.gateway.require_user(actor)
            user = await self._get_user(user_id)
            self.gateway.ensure(can_manage_user(editor, user))

            if data.role_id is not None and data.role_id != user.role_id:
                user.role = await self._get_assignable_role(editor, data.role_id)
            if data.email is not None:
                email = normalize_email(data.email) or data.email
                if email != user.email:
                    await self._ensure_email_available(email)
                    user.email = email
            if data.full_name is not None:
                user.full_name = data.full_name
            if data.password is not None:
                user.password_hash = hash_password(data.password)
            if data.is_active is not None:
                user.is_active = data.is_active

            user = await self.repo.update(user)
            logger.info("user_updated", user_id=str(user.id))
            return UserResponse.model_validate(user)

        return await self.gateway.run("user.update", handler)

    async def set_user_permissions(
        self, actor: User | None, user_id: UUID, data: UserPermissionsUpdate
    ) -> ActionResult[Any]:
        """Replace a user's direct permission grants."""

        async def handler() -> UserResponse:
            await self.gateway.authorize(actor, "user.UPDATE")
            editor = self.gateway.require_user(actor)
            user = await self._get_user(user_id)
            self.gateway.ensure(can_manage_user(editor, user))

            permissions = await resolve_permission_keys(self.permission_repo, data.permissions)
            current = set(user.direct_permission_keys)
            await self._ensure_grantable(editor, current ^ {p.key for p in permissions})

            user.direct_permissions = permissions
            user = await self.repo.update(user)
            logger.info(
                "user_permissions_updated",
                user_id=str(user.id),
                permissions=user.direct_permission_keys,
            )
            return UserResponse.model_validate(user)

        return await self.gateway.run("user.set_permissions", handler)

    async def delete_user(self, actor: User | None, user_id: UUID) -> ActionResult[Any]:
        """Delete another user's account."""

        async def handler() -> None:
            await self.gateway.authorize(actor, "user.DELETE")
            editor = self.gateway.require_user(actor)
            user = await self._get_user(user_id)
            self.gateway.ensure(can_manage_user(editor, user))

            await self.repo.delete(user)
            logger.info("user_deleted", user_id=str(user_id))

        return await self.gateway.run("user.delete", handler)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
