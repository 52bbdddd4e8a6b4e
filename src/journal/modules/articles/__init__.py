"""Articles module - blog posts and journal papers."""

from fastapi import APIRouter


router = APIRouter(prefix="/articles", tags=["articles"])

# Import routes to register them (must be after router is defined)
from journal.modules.articles import routes  # noqa: F401, E402
