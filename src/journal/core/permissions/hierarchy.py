"""Fixed role ranking used for role assignment and user management rules.

The ranking is a lookup table, not something derived from the roles'
permission sets. It only answers "may this user hand out that role" and
"may this user manage that account"; permission checks never consult it.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, TypeVar

from journal.core.permissions.catalog import parse_permission_key
from journal.core.permissions.schemas import (
    AUTHENTICATION_REQUIRED,
    Decision,
    DenialCode,
    GrantSource,
)


if TYPE_CHECKING:
    from journal.modules.users.models import User


SUPER_ADMIN_ROLE = "Super Admin"
ADMIN_ROLE = "Admin"

ROLE_RANKS: dict[str, int] = {
    "Viewer": 1,
    "Author": 2,
    "Editor": 3,
    ADMIN_ROLE: 4,
    SUPER_ADMIN_ROLE: 5,
}

# Resources whose permissions govern access itself. Direct grants of these
# are reserved for Admin and above.
ADMINISTRATIVE_RESOURCES: frozenset[str] = frozenset({"user", "role", "permission"})

CANNOT_MANAGE_SELF = "You cannot manage your own account through the admin interface"
CANNOT_MANAGE_SUPER_ADMIN = "Only a Super Admin can manage Super Admin accounts"
CANNOT_MANAGE_HIGHER_ROLE = "You cannot manage users whose role ranks above your own"

_RoleT = TypeVar("_RoleT")


def role_rank(role_name: str) -> int | None:
    """Rank of a role name, or None for roles outside the ranking table."""
    return ROLE_RANKS.get(role_name)


def is_super_admin(user: "User | None") -> bool:
    """True if the user holds the Super Admin role."""
    return user is not None and user.role is not None and user.role.name == SUPER_ADMIN_ROLE


def can_assign(actor: "User | None", role_name: str) -> bool:
    """Whether ``actor`` may give ``role_name`` to someone.

    Super Admin may assign anything. Everyone else may assign roles ranked
    at or below their own, never Super Admin, and never a role missing from
    the ranking table.
    """
    if actor is None or actor.role is None:
        return False
    if is_super_admin(actor):
        return True
    if role_name == SUPER_ADMIN_ROLE:
        return False

    actor_rank = role_rank(actor.role.name)
    target_rank = role_rank(role_name)
    if actor_rank is None or target_rank is None:
        return False
    return actor_rank >= target_rank


def assignable_roles(actor: "User | None", roles: Iterable[_RoleT]) -> list[_RoleT]:
    """Filter ``roles`` (objects with a ``name``) down to those ``actor`` may assign."""
    return [role for role in roles if can_assign(actor, role.name)]  # type: ignore[attr-defined]


def can_manage_user(actor: "User | None", target: "User") -> Decision:
    """Whether ``actor`` may edit, delete or re-permission ``target``.

    This is a restriction layered on top of the regular ``user.*`` permission
    checks, not a replacement for them. Outside Super Admin, the target's
    role must rank at or below the actor's; unranked roles on either side
    deny.
    """
    if actor is None:
        return Decision.deny(AUTHENTICATION_REQUIRED, DenialCode.AUTH_REQUIRED)
    if actor.id == target.id:
        return Decision.deny(CANNOT_MANAGE_SELF)
    if is_super_admin(actor):
        return Decision.allow(GrantSource.SUPER_ADMIN)
    if is_super_admin(target):
        return Decision.deny(CANNOT_MANAGE_SUPER_ADMIN)

    actor_rank = role_rank(actor.role.name) if actor.role is not None else None
    target_rank = role_rank(target.role.name) if target.role is not None else None
    if actor_rank is None or target_rank is None or target_rank > actor_rank:
        return Decision.deny(CANNOT_MANAGE_HIGHER_ROLE)
    return Decision.allow(GrantSource.ROLE)


def can_grant_directly(actor: "User | None", permission_key: str) -> bool:
    """Whether ``actor``'s rank allows handing out ``permission_key`` as an override.

    Keys on administrative resources need Admin rank or Super Admin. This
    does not check that the actor holds the key; callers do that with the
    permission checker.

    Raises:
        InvalidPermissionKeyError: If ``permission_key`` is malformed
    """
    if actor is None or actor.role is None:
        return False
    if is_super_admin(actor):
        return True
    if parse_permission_key(permission_key).resource not in ADMINISTRATIVE_RESOURCES:
        return True
    rank = role_rank(actor.role.name)
    return rank is not None and rank >= ROLE_RANKS[ADMIN_ROLE]
