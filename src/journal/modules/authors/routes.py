"""Author API routes."""

from uuid import UUID

from fastapi import status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.authors import router
from journal.modules.authors.schemas import (
    AuthorCreate,
    AuthorListResponse,
    AuthorResponse,
    AuthorUpdate,
)
from journal.modules.authors.services import AuthorSvc


@router.get(
    "",
    response_model=AuthorListResponse,
    summary="List authors",
    description="List the author directory.",
)
@require_permission("author.READ")
async def list_authors(
    service: AuthorSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
) -> AuthorListResponse:
    """List authors."""
    authors = await service.list_authors()
    return AuthorListResponse(
        items=[AuthorResponse.model_validate(a) for a in authors],
        total=len(authors),
    )


@router.post(
    "",
    summary="Create author",
    description="Add an author to the directory.",
)
async def create_author(
    data: AuthorCreate,
    service: AuthorSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create an author."""
    return action_response(
        await service.create_author(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{author_id}",
    summary="Update author",
    description="Edit an author's details.",
)
async def update_author(
    author_id: UUID,
    data: AuthorUpdate,
    service: AuthorSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update an author."""
    return action_response(await service.update_author(current_user, author_id, data))


@router.delete(
    "/{author_id}",
    summary="Delete author",
    description="Remove an author. Rejected while the author is on any article.",
)
async def delete_author(
    author_id: UUID,
    service: AuthorSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete an author."""
    return action_response(await service.delete_author(current_user, author_id))
