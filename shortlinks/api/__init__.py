"""API package for the short links service."""

from .routes import health_router, links_router, resolve_router

__all__ = ["health_router", "links_router", "resolve_router"]
