"""Roles module - role management."""

from fastapi import APIRouter


router = APIRouter(prefix="/roles", tags=["roles"])

# Import routes to register them (must be after router is defined)
from journal.modules.roles import routes  # noqa: F401, E402
