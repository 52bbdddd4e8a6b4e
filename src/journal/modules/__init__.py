"""Feature modules with auto-discovery."""

import logging
from importlib import import_module
from pathlib import Path

from fastapi import APIRouter


logger = logging.getLogger(__name__)

MODULES_DIR = Path(__file__).parent


def _module_names() -> list[str]:
    return [
        path.name
        for path in sorted(MODULES_DIR.iterdir())
        if path.is_dir() and not path.name.startswith("_")
    ]


def discover_modules() -> list[APIRouter]:
    """Auto-discover and return routers from all modules.

    This function scans the modules directory for subdirectories
    that contain a router attribute in their __init__.py.

    Returns:
        List of FastAPI routers from discovered modules.
    """
    routers: list[APIRouter] = []

    for name in _module_names():
        module = import_module(f"journal.modules.{name}")
        if hasattr(module, "router"):
            routers.append(module.router)
            logger.info("Loaded module: %s", name)

    return routers


def load_models() -> None:
    """Import every module's models so all tables are registered on ``Base.metadata``.

    Needed before ``create_all`` or any ORM query from outside the app,
    such as the CLI.
    """
    for name in _module_names():
        if (MODULES_DIR / name / "models.py").exists():
            import_module(f"journal.modules.{name}.models")
