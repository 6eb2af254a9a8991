"""Edge router middleware.

Treats the last segment of every inbound GET/HEAD path as a candidate slug
and redirects when it resolves. Unmatched paths fall through to normal
routing without an error.
"""

import logging
from typing import Callable, Optional, Sequence

from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..core.exceptions import LinkNotFound, StoreFailure
from ..services.resolution import ResolutionService
from ..utils.slugs import validate_slug

logger = logging.getLogger(__name__)


def candidate_slug(path: str) -> Optional[str]:
    """Return the final path segment if it looks like a slug."""
    segment = path.split("/")[-1]
    return segment if validate_slug(segment) else None


class EdgeRouterMiddleware(BaseHTTPMiddleware):
    """Middleware that turns short link visits into redirects."""

    def __init__(
        self,
        app,
        bypass_prefixes: Sequence[str] = ("/resolve",),
        redirect_status_code: int = 307,
    ):
        super().__init__(app)
        self.bypass_prefixes = tuple(p.rstrip("/") for p in bypass_prefixes)
        self.redirect_status_code = redirect_status_code

    def is_bypassed(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self.bypass_prefixes
        )

    async def dispatch(self, request: Request, call_next: Callable):
        if request.method not in ("GET", "HEAD") or self.is_bypassed(request.url.path):
            return await call_next(request)

        slug = candidate_slug(request.url.path)
        if slug is None:
            return await call_next(request)

        service = ResolutionService(request.app.state.store, clock=request.app.state.clock)
        try:
            link = service.resolve(slug)
        except LinkNotFound:
            return await call_next(request)
        except StoreFailure as e:
            logger.error(f"Edge lookup failed for {slug}: {e}")
            return JSONResponse(status_code=e.status_code, content={"message": e.message})

        logger.debug(f"Redirecting {slug} to {link.url}")
        return RedirectResponse(url=link.url, status_code=self.redirect_status_code)
