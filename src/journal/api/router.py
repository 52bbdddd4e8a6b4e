"""Root API router: health checks, app info and the /api/v1 module mounts."""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from journal.api.dependencies import DBSession
from journal.config import settings
from journal.core.auth.routes import router as auth_router
from journal.core.permissions.catalog import (
    CRUD_ACTIONS,
    DEFAULT_PERMISSIONS,
    DEFAULT_ROLE_GRANTS,
    RESOURCES,
    catalog_cache,
)
from journal.core.permissions.hierarchy import SUPER_ADMIN_ROLE
from journal.modules import discover_modules


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    status: str
    checks: dict[str, str]


api_router = APIRouter()
health_router = APIRouter(tags=["health"])


async def _check_database(db: DBSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return str(e)
    return "ok"


async def _check_catalog(db: DBSession) -> str:
    """Every default permission must be in the store, or checks would deny it."""
    try:
        stored = await catalog_cache.load(db)
    except SQLAlchemyError as e:
        return str(e)
    missing = stored.unknown(definition.key for definition in DEFAULT_PERMISSIONS)
    if missing:
        return f"missing {len(missing)} default permissions; run journal-admin sync-permissions"
    return "ok"


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Returns 200 while the process is running.",
)
async def liveness() -> HealthResponse:
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Checks the database and that the default permission catalog is seeded.",
)
async def readiness(db: DBSession) -> JSONResponse:
    """Report 503 until the database answers and the catalog is seeded."""
    checks = {"database": await _check_database(db)}
    if checks["database"] == "ok":
        checks["permissions"] = await _check_catalog(db)

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_ok else "degraded",
            "checks": checks,
        },
    )


@health_router.get(
    "/info",
    summary="Application info",
    description="Application metadata and the built-in permission model.",
)
async def info() -> dict[str, Any]:
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "debug": settings.debug,
        "resources": sorted(RESOURCES),
        "actions": list(CRUD_ACTIONS),
        "default_roles": [SUPER_ADMIN_ROLE, *DEFAULT_ROLE_GRANTS],
    }


v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(auth_router)
for module_router in discover_modules():
    v1_router.include_router(module_router)

api_router.include_router(health_router)
api_router.include_router(v1_router)
