"""Logging module with structured logging and request tracking."""

from journal.core.logging.middleware import RequestLoggingMiddleware
from journal.core.logging.configure import configure_logging


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
