"""Value types exchanged with the permission checker."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


AUTHENTICATION_REQUIRED = "Authentication required"
UNKNOWN_PERMISSION = "Unknown permission"
PERMISSION_DENIED = "You don't have permission to perform this action"


class DenialCode(str, Enum):
    """Why a check was denied."""

    AUTH_REQUIRED = "auth_required"
    UNKNOWN_PERMISSION = "unknown_permission"
    PERMISSION_DENIED = "permission_denied"


class GrantSource(str, Enum):
    """Which rule allowed a check."""

    SUPER_ADMIN = "super_admin"
    ROLE = "role"
    OVERRIDE = "override"
    OWNER = "owner"


class Decision(BaseModel):
    """Outcome of a permission check.

    Denials always carry a reason and a code; allows record which rule
    granted them.
    """

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None
    code: DenialCode | None = None
    granted_by: GrantSource | None = None

    @model_validator(mode="after")
    def _denial_has_reason(self) -> "Decision":
        if not self.allowed and not self.reason:
            raise ValueError("A denied decision requires a reason")
        return self

    @classmethod
    def allow(cls, granted_by: GrantSource) -> "Decision":
        return cls(allowed=True, granted_by=granted_by)

    @classmethod
    def deny(
        cls,
        reason: str = PERMISSION_DENIED,
        code: DenialCode = DenialCode.PERMISSION_DENIED,
    ) -> "Decision":
        return cls(allowed=False, reason=reason, code=code)


class ResourceOwnershipContext(BaseModel):
    """Identifies the resource instance an ownership-scoped check is about."""

    model_config = ConfigDict(frozen=True)

    resource_type: str
    resource_id: str


class EffectivePermissions(BaseModel):
    """A user's grants split by source, for display."""

    role: list[str]
    direct: list[str]
    all: list[str]
    is_super_admin: bool
