"""Short link API routes.

This module contains the endpoints backing the presentation layer and the
edge router:
- Create short link (POST /shorten)
- Resolve slug to its record (GET /resolve/{slug})
- Redirect to the destination of a slug (GET /resolve/{slug}/redirect)
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ...core.config import Settings
from ...core.exceptions import LinkExpired, LinkNotFound, MissingSlug
from ...models.link import ShortenRequest
from ...schemas.link import MessageResponse, ShortLinkResponse
from ...services import ResolutionService, ShorteningService
from ...utils.slugs import build_short_url
from ..dependencies import (
    get_app_settings,
    get_resolution_service,
    get_shortening_service,
)

router = APIRouter(prefix="", tags=["Links"])

# Mounted under settings.resolve_path by the application factory
resolve_router = APIRouter(tags=["Resolution"])


def get_base_url(request: Request, settings: Settings) -> str:
    """Get the public base URL for share links.

    Args:
        request: FastAPI request object.
        settings: Application settings.

    Returns:
        Base URL string.
    """
    return (settings.base_url or str(request.base_url)).rstrip("/")


@router.post(
    "/shorten",
    response_model=ShortLinkResponse,
    status_code=201,
    responses={
        201: {"description": "Short link created successfully"},
        400: {"model": MessageResponse, "description": "Invalid request"},
        500: {"model": MessageResponse, "description": "Storage failure"},
    },
    summary="Create a short link",
    description="Create a short link to a URL that expires after durationMillis.",
)
async def create_short_link(
    request: Request,
    payload: ShortenRequest,
    service: ShorteningService = Depends(get_shortening_service),
    settings: Settings = Depends(get_app_settings),
) -> ShortLinkResponse:
    """Create a short link.

    Args:
        request: FastAPI request object.
        payload: Validated creation request.
        service: Shortening service.
        settings: Application settings.

    Returns:
        Created short link, including its share URL.
    """
    link = service.create_from_request(payload)
    short_url = build_short_url(get_base_url(request, settings), link.slug)
    return ShortLinkResponse.from_link(link, short_url=short_url)


@resolve_router.get(
    "/",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse, "description": "No slug given"}},
    summary="Resolve without a slug",
)
async def resolve_without_slug() -> None:
    raise MissingSlug()


@resolve_router.get(
    "/{slug}",
    response_model=ShortLinkResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Live short link"},
        404: {"model": MessageResponse, "description": "Slug not found or expired"},
    },
    summary="Resolve a slug",
    description="Return the live record for a slug. Expired records are deleted.",
)
async def resolve_slug(
    slug: str,
    service: ResolutionService = Depends(get_resolution_service),
    settings: Settings = Depends(get_app_settings),
):
    """Resolve a slug to its stored record.

    Args:
        slug: The slug to look up.
        service: Resolution service.
        settings: Application settings.

    Returns:
        The live record, or a cacheable 404 when the slug is unknown.
    """
    try:
        link = service.resolve(slug)
    except LinkExpired:
        raise
    except LinkNotFound as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"message": e.message},
            headers={
                "Access-Control-Allow-Origin": "*",
                "Cache-Control": settings.not_found_cache_control,
            },
        )
    return ShortLinkResponse.from_link(link)


@resolve_router.get(
    "/{slug}/redirect",
    response_class=RedirectResponse,
    responses={
        307: {"description": "Redirect to the destination URL"},
        404: {"model": MessageResponse, "description": "Link not found or expired"},
    },
    summary="Redirect to a slug's destination",
    description="Redirect a live slug. Unknown and expired slugs answer 404.",
)
async def redirect_slug(
    slug: str,
    service: ResolutionService = Depends(get_resolution_service),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """Redirect to the destination URL of a slug.

    Args:
        slug: The slug to look up.
        service: Resolution service.
        settings: Application settings.

    Returns:
        Redirect response to the stored URL.
    """
    try:
        link = service.resolve(slug)
    except LinkExpired:
        raise
    except LinkNotFound as e:
        raise LinkNotFound("link not found") from e
    return RedirectResponse(url=link.url, status_code=settings.redirect_status_code)
