"""API routes."""

from .health import router as health_router
from .links import router as links_router
from .links import resolve_router

__all__ = ["health_router", "links_router", "resolve_router"]
