"""Editorial board module - board editors and advisors shown on the site."""

from fastapi import APIRouter


router = APIRouter(prefix="/editorial-board", tags=["editorial-board"])

# Import routes to register them (must be after router is defined)
from journal.modules.editorial_board import routes  # noqa: F401, E402
