"""Permission catalog API routes."""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import CurrentUser, OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.core.permissions.schemas import EffectivePermissions
from journal.modules.permissions import router
from journal.modules.permissions.schemas import (
    PermissionCreate,
    PermissionListResponse,
    PermissionUpdate,
)
from journal.modules.permissions.services import PermissionSvc


@router.get(
    "",
    response_model=PermissionListResponse,
    summary="List permissions",
    description="List the permission catalog with role and user assignment counts.",
)
@require_permission("permission.READ")
async def list_permissions(
    service: PermissionSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> PermissionListResponse:
    """List the permission catalog."""
    items = await service.list_permissions()
    return PermissionListResponse(items=items, total=len(items))


@router.get(
    "/me",
    response_model=EffectivePermissions,
    summary="Get my permissions",
    description="Returns the current user's permissions split by role and direct grants.",
)
async def my_permissions(
    current_user: CurrentUser,
    checker: Checker,
) -> EffectivePermissions:
    """Get the current user's effective permissions."""
    return checker.effective_permissions(current_user)


@router.post(
    "",
    summary="Create permission",
    description="Add a key to the permission catalog.",
)
async def create_permission(
    data: PermissionCreate,
    service: PermissionSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a permission."""
    result = await service.create_permission(current_user, data)
    return action_response(result, status.HTTP_201_CREATED)


@router.post(
    "/sync",
    summary="Sync default permissions",
    description="Insert any default permissions missing from the catalog.",
)
async def sync_permissions(
    service: PermissionSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Sync the default catalog."""
    return action_response(await service.sync_permissions(current_user))


@router.patch(
    "/{permission_id}",
    summary="Update permission",
    description="Edit a permission's key or description.",
)
async def update_permission(
    permission_id: UUID,
    data: PermissionUpdate,
    service: PermissionSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a permission."""
    return action_response(
        await service.update_permission(current_user, permission_id, data)
    )


@router.delete(
    "/{permission_id}",
    summary="Delete permission",
    description="Remove a permission. Rejected while any role or user holds it.",
)
async def delete_permission(
    permission_id: UUID,
    service: PermissionSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a permission."""
    return action_response(await service.delete_permission(current_user, permission_id))
