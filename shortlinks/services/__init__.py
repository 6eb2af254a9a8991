"""Services package - link creation and resolution."""

from .resolution import ResolutionService
from .shortening import ShorteningService

__all__ = ["ResolutionService", "ShorteningService"]
