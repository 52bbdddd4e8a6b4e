"""Permission system database models.

This module defines the RBAC models:
- Permission: an entry in the permission catalog, keyed ``resource.ACTION``
- Role: a named bundle of permissions; every user holds exactly one
- role_permissions: Role <-> Permission association
- user_permissions: direct per-user grants that add to the role's grants
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PERMISSION_KEY_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from journal.core.database.base import Base, TimestampMixin, UUIDMixin
from journal.core.permissions.catalog import parse_permission_key


if TYPE_CHECKING:
    from journal.modules.users.models import User


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "permission_id",
        Uuid,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

user_permissions = Table(
    "user_permissions",
    Base.metadata,
    Column(
        "user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "permission_id",
        Uuid,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Permission(Base, UUIDMixin, TimestampMixin):
    """A catalog entry naming one action on one resource type.

    Attributes:
        key: Unique key such as "article.UPDATE" or "callforpapers.DELETE"
        description: Human-readable description shown in the admin UI
    """

    __tablename__ = "permissions"

    key: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_KEY_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
        passive_deletes=True,
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        secondary=user_permissions,
        back_populates="direct_permissions",
        passive_deletes=True,
    )

    @property
    def resource(self) -> str:
        return parse_permission_key(self.key).resource

    @property
    def action(self) -> str:
        return parse_permission_key(self.key).action

    def __repr__(self) -> str:
        return f"<Permission({self.key})>"


class Role(Base, UUIDMixin, TimestampMixin):
    """A named set of permissions.

    Attributes:
        name: Unique role name ("Super Admin", "Admin", "Editor", ...)
        description: Human-readable description
        is_system: System roles cannot be deleted or renamed
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )
    is_system: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    permissions: Mapped[list["Permission"]] = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="role",
        passive_deletes=True,
    )

    @property
    def permission_keys(self) -> frozenset[str]:
        """Keys granted by this role."""
        return frozenset(permission.key for permission in self.permissions)

    @property
    def sorted_permission_keys(self) -> list[str]:
        return sorted(self.permission_keys)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
