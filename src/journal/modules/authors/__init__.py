"""Authors module - the author directory."""

from fastapi import APIRouter


router = APIRouter(prefix="/authors", tags=["authors"])

# Import routes to register them (must be after router is defined)
from journal.modules.authors import routes  # noqa: F401, E402
