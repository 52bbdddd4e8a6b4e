"""Editorial board API routes."""

from uuid import UUID

from fastapi import Query, status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.editorial_board import router
from journal.modules.editorial_board.schemas import (
    BoardMemberCreate,
    BoardMemberListResponse,
    BoardMemberResponse,
    BoardMemberUpdate,
    BoardOrderUpdate,
)
from journal.modules.editorial_board.services import EditorialBoardSvc


@router.get(
    "",
    response_model=BoardMemberListResponse,
    summary="List board members",
    description="List editorial board members and advisors in board order.",
)
@require_permission("editorialboard.READ")
async def list_members(
    service: EditorialBoardSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
    include_archived: bool = Query(True, description="Include archived members"),
) -> BoardMemberListResponse:
    """List board members."""
    members = await service.list_members(include_archived=include_archived)
    return BoardMemberListResponse(
        items=[BoardMemberResponse.model_validate(m) for m in members],
        total=len(members),
    )


@router.post(
    "",
    summary="Create board member",
    description="Add a member to the board.",
)
async def create_member(
    data: BoardMemberCreate,
    service: EditorialBoardSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a board member."""
    return action_response(
        await service.create_member(current_user, data), status.HTTP_201_CREATED
    )


@router.put(
    "/order",
    summary="Reorder board",
    description="Renumber the listed members in the order given.",
)
async def reorder_members(
    data: BoardOrderUpdate,
    service: EditorialBoardSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Reorder the board."""
    return action_response(await service.reorder_members(current_user, data))


@router.patch(
    "/{member_id}",
    summary="Update board member",
    description="Edit a board member's details.",
)
async def update_member(
    member_id: UUID,
    data: BoardMemberUpdate,
    service: EditorialBoardSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a board member."""
    return action_response(await service.update_member(current_user, member_id, data))


@router.delete(
    "/{member_id}",
    summary="Delete board member",
    description="Remove a member from the board.",
)
async def delete_member(
    member_id: UUID,
    service: EditorialBoardSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a board member."""
    return action_response(await service.delete_member(current_user, member_id))
