"""Notification API routes."""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.notifications import router
from journal.modules.notifications.schemas import (
    NotificationCreate,
    NotificationListResponse,
    NotificationResponse,
    NotificationUpdate,
)
from journal.modules.notifications.services import NotificationSvc


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List notifications",
    description="List notifications, newest first, including inactive and expired ones.",
)
@require_permission("notification.READ")
async def list_notifications(
    service: NotificationSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> NotificationListResponse:
    """List notifications."""
    notifications = await service.list_notifications()
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        total=len(notifications),
    )


@router.post(
    "",
    summary="Create notification",
    description="Publish a notification.",
)
async def create_notification(
    data: NotificationCreate,
    service: NotificationSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create a notification."""
    return action_response(
        await service.create_notification(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{notification_id}",
    summary="Update notification",
    description="Edit a notification.",
)
async def update_notification(
    notification_id: UUID,
    data: NotificationUpdate,
    service: NotificationSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update a notification."""
    return action_response(
        await service.update_notification(current_user, notification_id, data)
    )


@router.delete(
    "/{notification_id}",
    summary="Delete notification",
    description="Remove a notification.",
)
async def delete_notification(
    notification_id: UUID,
    service: NotificationSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete a notification."""
    return action_response(
        await service.delete_notification(current_user, notification_id)
    )
