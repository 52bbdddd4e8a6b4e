"""Role API routes."""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.roles import router
from journal.modules.roles.schemas import RoleCreate, RoleListResponse, RoleUpdate
from journal.modules.roles.services import RoleSvc


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
    description="List roles with their permissions and user counts.",
)
@require_permission("role.READ")
async def list_roles(
    service: RoleSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> RoleListResponse:
    """List roles."""
    items = await service.list_roles()
    return RoleListResponse(items=items, total=len(items))


@router.post(
    "",
    summary="Create role",
    description="Create a role. Every permission key must exist in the catalog.",
)
async def create_role(
    data: RoleCreate,
    service: RoleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a role."""
    return action_response(
        await service.create_role(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{role_id}",
    summary="Update role",
    description="Rename a role, edit its description, or replace its permissions.",
)
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    service: RoleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a role."""
    return action_response(await service.update_role(current_user, role_id, data))


@router.delete(
    "/{role_id}",
    summary="Delete role",
    description="Delete a role. System roles and roles held by users cannot be deleted.",
)
async def delete_role(
    role_id: UUID,
    service: RoleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a role."""
    return action_response(await service.delete_role(current_user, role_id))
