"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from journal.api.router import api_router
from journal.config import settings
from journal.core.auth import RequestIdMiddleware, UserContextMiddleware
from journal.core.database import async_engine, async_session_factory
from journal.core.errors import register_exception_handlers
from journal.core.logging import RequestLoggingMiddleware, configure_logging
from journal.modules.permissions.services import sync_default_permissions


configure_logging(settings.log_level, json_output=settings.is_production)

logger = structlog.get_logger()


async def sync_permission_catalog() -> None:
    """Insert default permissions missing from the store.

    A database that is not reachable yet is logged and skipped; the
    catalog cache loads lazily on the first permission check.
    """
    try:
        async with async_session_factory() as session:
            created = await sync_default_permissions(session)
            await session.commit()
    except SQLAlchemyError as e:
        logger.warning("permission_sync_failed", error=str(e))
        return
    logger.info("permission_catalog_ready", created=len(created))


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    if settings.sync_permissions_on_startup:
        await sync_permission_catalog()

    yield

    logger.info("application_shutdown")
    await async_engine.dispose()
    logger.info("database_engine_disposed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Admin API for the journal website: content management behind role-based access control",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = ["http://localhost:3000", "http://localhost:5173"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Add request ID middleware (outermost, runs first)
    app.add_middleware(RequestIdMiddleware)

    # Bind the token's user ID to the log context
    app.add_middleware(UserContextMiddleware)

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    return app

