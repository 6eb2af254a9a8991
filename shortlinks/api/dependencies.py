"""FastAPI dependency providers.

The store, settings and clock live on ``app.state`` and are set up by
``create_app``; services are built per request from them.
"""

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.store import LinkStore
from ..services import ResolutionService, ShorteningService


def get_store(request: Request) -> LinkStore:
    """Get the link store for dependency injection."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


def get_shortening_service(
    request: Request,
    store: LinkStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ShorteningService:
    return ShorteningService(
        store,
        slug_length=settings.slug_length,
        max_attempts=settings.slug_max_attempts,
        clock=request.app.state.clock,
    )


def get_resolution_service(
    request: Request,
    store: LinkStore = Depends(get_store),
) -> ResolutionService:
    return ResolutionService(store, clock=request.app.state.clock)
