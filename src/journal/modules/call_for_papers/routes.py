"""Call-for-papers API routes."""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.call_for_papers import router
from journal.modules.call_for_papers.schemas import (
    CallForPapersCreate,
    CallForPapersListResponse,
    CallForPapersResponse,
    CallForPapersUpdate,
)
from journal.modules.call_for_papers.services import CallForPapersSvc


@router.get(
    "",
    response_model=CallForPapersListResponse,
    summary="List calls for papers",
    description="List calls for papers, nearest deadline first.",
)
@require_permission("callforpapers.READ")
async def list_calls(
    service: CallForPapersSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> CallForPapersListResponse:
    """List calls for papers."""
    calls = await service.list_calls()
    return CallForPapersListResponse(
        items=[CallForPapersResponse.model_validate(c) for c in calls],
        total=len(calls),
    )


@router.post(
    "",
    summary="Create call for papers",
    description="Open a call for papers and publish a notification announcing it.",
)
async def create_call(
    data: CallForPapersCreate,
    service: CallForPapersSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a call for papers."""
    return action_response(
        await service.create_call(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{call_id}",
    summary="Update call for papers",
    description="Edit a call for papers.",
)
async def update_call(
    call_id: UUID,
    data: CallForPapersUpdate,
    service: CallForPapersSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a call for papers."""
    return action_response(await service.update_call(current_user, call_id, data))


@router.delete(
    "/{call_id}",
    summary="Delete call for papers",
    description="Delete a call for papers.",
)
async def delete_call(
    call_id: UUID,
    service: CallForPapersSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a call for papers."""
    return action_response(await service.delete_call(current_user, call_id))
