"""Permissions module - permission catalog management."""

from fastapi import APIRouter


router = APIRouter(prefix="/permissions", tags=["permissions"])

# Import routes to register them (must be after router is defined)
from journal.modules.permissions import routes  # noqa: F401, E402
