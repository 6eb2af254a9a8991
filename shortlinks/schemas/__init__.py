"""Schemas package for the short links service."""

from .link import ShortLinkResponse, MessageResponse, HealthResponse

__all__ = [
    "ShortLinkResponse",
    "MessageResponse",
    "HealthResponse",
]
