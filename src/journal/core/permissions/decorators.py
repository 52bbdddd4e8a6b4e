"""Permission decorators for read endpoints.

Mutations go through the action gateway; plain read endpoints are guarded
with these decorators instead, which raise RFC 7807 errors on denial.
The decorated route must declare ``current_user: OptionalUser`` and
``checker: Checker`` parameters.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar, cast

from journal.core.errors import ForbiddenError, UnauthorizedError
from journal.core.permissions.gateway import denial_message
from journal.core.permissions.schemas import DenialCode


if TYPE_CHECKING:
    from journal.core.permissions.checker import PermissionChecker
    from journal.core.permissions.schemas import Decision
    from journal.modules.users.models import User


P = ParamSpec("P")
R = TypeVar("R")


def _get_user_and_checker(
    kwargs: dict[str, Any],
) -> tuple["User | None", "PermissionChecker | None"]:
    user = cast("User | None", kwargs.get("current_user"))
    checker = cast("PermissionChecker | None", kwargs.get("checker"))
    return user, checker


def _raise_for(decision: "Decision", permission_key: str, required: list[str]) -> None:
    if decision.code == DenialCode.AUTH_REQUIRED:
        raise UnauthorizedError(decision.reason)
    raise ForbiddenError(
        denial_message(permission_key, decision),
        error_code=decision.code.value if decision.code else None,
        details={"required_permissions": required},
    )


def require_permission(
    permission_key: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires a single permission to access a route.

    Usage:
        @router.get("")
        @require_permission("role.READ")
        async def list_roles(current_user: OptionalUser, checker: Checker):
            ...

    Raises:
        UnauthorizedError: If no user is authenticated
        ForbiddenError: If the user lacks the permission
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            user, checker = _get_user_and_checker(kwargs)
            if checker is None:
                raise ForbiddenError(
                    "Permission check failed",
                    error_code="permission_check_failed",
                )

            decision = await checker.check(user, permission_key)
            if not decision.allowed:
                _raise_for(decision, permission_key, [permission_key])

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_any_permission(
    permission_keys: list[str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires any one of the given permissions.

    Usage:
        @router.get("/assignable-roles")
        @require_any_permission(["user.CREATE", "user.UPDATE"])
        async def assignable(current_user: OptionalUser, checker: Checker):
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            user, checker = _get_user_and_checker(kwargs)
            if checker is None:
                raise ForbiddenError(
                    "Permission check failed",
                    error_code="permission_check_failed",
                )

            decision = await checker.check_any(user, permission_keys)
            if not decision.allowed:
                if decision.code == DenialCode.AUTH_REQUIRED:
                    raise UnauthorizedError(decision.reason)
                raise ForbiddenError(
                    f"Missing required permission. Need one of: {', '.join(permission_keys)}",
                    error_code="permission_denied",
                    details={"required_permissions": permission_keys},
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator
