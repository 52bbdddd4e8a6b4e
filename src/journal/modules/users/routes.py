"""User management API routes.

Login and the current user's profile live in the auth routes; this module
handles managing other accounts.
"""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_any_permission, require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.users import router
from journal.modules.users.schemas import (
    AssignableRoleResponse,
    UserCreate,
    UserListResponse,
    UserPermissionsUpdate,
    UserResponse,
    UserUpdate,
)
from journal.modules.users.services import UserSvc


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="List all admin-area users with their roles.",
)
@require_permission("user.READ")
async def list_users(
    service: UserSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> UserListResponse:
    """List users."""
    users = await service.list_users()
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=len(users),
    )


@router.get(
    "/assignable-roles",
    response_model=list[AssignableRoleResponse],
    summary="List assignable roles",
    description="Roles the current user may give to other users.",
)
@require_any_permission(["user.CREATE", "user.UPDATE"])
async def list_assignable_roles(
    service: UserSvc,
    current_user: OptionalUser,
    checker: Checker,  # noqa: ARG001 - read by require_any_permission
) -> list[AssignableRoleResponse]:
    """List roles the current user may assign."""
    return await service.assignable_roles(current_user)


@router.post(
    "",
    summary="Create user",
    description="Create a user. The role must rank at or below your own.",
)
async def create_user(
    data: UserCreate,
    service: UserSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a user."""
    return action_response(
        await service.create_user(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{user_id}",
    summary="Update user",
    description="Update another user's profile, role or status.",
)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    service: UserSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a user."""
    return action_response(await service.update_user(current_user, user_id, data))


@router.put(
    "/{user_id}/permissions",
    summary="Set direct permissions",
    description="Replace the permissions a user holds in addition to their role.",
)
async def set_user_permissions(
    user_id: UUID,
    data: UserPermissionsUpdate,
    service: UserSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Replace a user's direct permissions."""
    return action_response(
        await service.set_user_permissions(current_user, user_id, data)
    )


@router.delete(
    "/{user_id}",
    summary="Delete user",
    description="Delete another user's account.",
)
async def delete_user(
    user_id: UUID,
    service: UserSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a user."""
    return action_response(await service.delete_user(current_user, user_id))
