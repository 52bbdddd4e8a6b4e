"""Article API routes."""

from uuid import UUID

from fastapi import Query, status
from fastapi.responses import JSONResponse

from journal.core.auth.dependencies import OptionalUser
from journal.core.permissions.checker import Checker
from journal.core.permissions.decorators import require_permission
from journal.core.permissions.gateway import action_response
from journal.modules.articles import router
from journal.modules.articles.models import ArticleType
from journal.modules.articles.schemas import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
)
from journal.modules.articles.services import ArticleSvc


@router.get(
    "",
    response_model=ArticleListResponse,
    summary="List articles",
    description="List articles, newest first.",
)
@require_permission("article.READ")
async def list_articles(
    service: ArticleSvc,
    current_user: OptionalUser,  # noqa: ARG001 - read by require_permission
    checker: Checker,  # noqa: ARG001 - read by require_permission
    type: ArticleType | None = Query(None, description="Only list this kind of article"),  # noqa: A002
) -> ArticleListResponse:
    """List articles."""
    articles = await service.list_articles(type.value if type else None)
    return ArticleListResponse(
        items=[ArticleResponse.model_validate(a) for a in articles],
        total=len(articles),
    )


@router.post(
    "",
    summary="Create article",
    description="Create an article. At least one author is required.",
)
async def create_article(
    data: ArticleCreate,
    service: ArticleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Create an article."""
    return action_response(
        await service.create_article(current_user, data), status.HTTP_201_CREATED
    )


@router.patch(
    "/{article_id}",
    summary="Update article",
    description="Update an article. Authors listed on the article may edit it.",
)
async def update_article(
    article_id: UUID,
    data: ArticleUpdate,
    service: ArticleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Update an article."""
    return action_response(await service.update_article(current_user, article_id, data))


@router.delete(
    "/{article_id}",
    summary="Delete article",
    description="Delete an article. Authors listed on the article may delete it.",
)
async def delete_article(
    article_id: UUID,
    service: ArticleSvc,
    current_user: OptionalUser,
) -> JSONResponse:
    """Delete an article."""
    return action_response(await service.delete_article(current_user, article_id))
