"""Notifications module - site announcements."""

from fastapi import APIRouter


router = APIRouter(prefix="/notifications", tags=["notifications"])

# Import routes to register them (must be after router is defined)
from journal.modules.notifications import routes  # noqa: F401, E402
