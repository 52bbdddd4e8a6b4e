"""Call-for-papers module - open calls for journal submissions."""

from fastapi import APIRouter


router = APIRouter(prefix="/call-for-papers", tags=["call-for-papers"])

# Import routes to register them (must be after router is defined)
from journal.modules.call_for_papers import routes  # noqa: F401, E402
