"""Response schemas for the short links service."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.link import ShortLink, millis_to_datetime


class ShortLinkResponse(BaseModel):
    """Response model for a short link record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    slug: str
    url: str
    created_at: datetime
    expires_at: datetime
    short_url: Optional[str] = None

    @classmethod
    def from_link(cls, link: ShortLink, short_url: Optional[str] = None) -> "ShortLinkResponse":
        return cls(
            slug=link.slug,
            url=link.url,
            created_at=millis_to_datetime(link.created_at),
            expires_at=millis_to_datetime(link.expires_at),
            short_url=short_url,
        )


class MessageResponse(BaseModel):
    """Response model for not-found and error messages."""

    message: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
