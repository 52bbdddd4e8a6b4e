"""User database models."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from journal.core.database.base import Base, TimestampMixin, UUIDMixin
from journal.core.permissions.models import Permission, Role, user_permissions


class User(Base, UUIDMixin, TimestampMixin):
    """An admin-area account.

    Every user holds exactly one role. Direct permissions are additive
    grants on top of the role; there is no way to revoke a role grant for
    a single user.

    Attributes:
        email: Unique email address, also used to link the user to an author
        password_hash: Bcrypt-hashed password
        full_name: User's full name
        is_active: Whether the user can log in
        role_id: The user's role
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    role_id: Mapped[UUID] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    role: Mapped[Role] = relationship(
        Role,
        back_populates="users",
        lazy="selectin",
    )
    direct_permissions: Mapped[list[Permission]] = relationship(
        Permission,
        secondary=user_permissions,
        back_populates="users",
        lazy="selectin",
    )

    @property
    def direct_permission_keys(self) -> list[str]:
        """Sorted keys of the user's direct permissions."""
        return sorted(permission.key for permission in self.direct_permissions)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
