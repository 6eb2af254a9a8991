"""Health check API routes."""

from fastapi import APIRouter, Depends

from ...core.store import LinkStore
from ...schemas.link import HealthResponse
from ..dependencies import get_store

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(store: LinkStore = Depends(get_store)) -> dict:
    """Health check endpoint.

    Touches the link store so storage failures surface as a 500.

    Returns:
        Health status.
    """
    store.count()
    return {"status": "healthy"}
