"""Short Links Service - Main FastAPI Application.

A small URL shortening service with:
- Create expiring short links
- Resolve slugs, deleting expired links on read
- Redirect visitors through the edge router
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.database import Database
from .core.exceptions import ShortLinkError
from .core.store import LinkStore
from .api.routes import health_router, links_router, resolve_router
from .middleware.edge import EdgeRouterMiddleware
from .models.link import describe_errors
from .utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)

SERVICE_PATHS = ("/shorten", "/health", "/docs", "/redoc", "/openapi.json")


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {app.state.settings.app_title}...")
    app.state.store.init_db()
    logger.info("Link store initialized")
    yield
    # Shutdown
    logger.info(f"Shutting down {app.state.settings.app_title}...")
    app.state.store.close()


async def short_link_error_handler(request: Request, exc: ShortLinkError):
    """Render service errors as JSON messages."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors."""
    return JSONResponse(status_code=400, content={"message": describe_errors(exc.errors())})


async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.error(f"Unhandled Exception: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[LinkStore] = None,
    clock: Clock = now_millis,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Loaded from the environment if omitted.
        store: Link store. A SQLite database at settings.db_path if omitted.
        clock: Source of the current time in epoch milliseconds.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if store is None:
        store = Database(str(settings.db_path))

    app = FastAPI(
        title=settings.app_title,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.clock = clock

    app.add_middleware(
        EdgeRouterMiddleware,
        bypass_prefixes=(settings.resolve_path, *SERVICE_PATHS),
        redirect_status_code=settings.redirect_status_code,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ShortLinkError, short_link_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(links_router)
    app.include_router(resolve_router, prefix=settings.resolve_path)

    return app


def run() -> None:
    """Run the service with uvicorn."""
    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
