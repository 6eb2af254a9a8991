"""Pydantic models for the short links service."""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Sequence, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MAX_URL_LENGTH = 2048

# 100 years
MAX_DURATION_MILLIS = 100 * 365 * 24 * 60 * 60 * 1000


def millis_to_datetime(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=millis)


def describe_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Render the first pydantic error as a one-line message."""
    if not errors:
        return "invalid request"
    error = errors[0]
    if error.get("type") == "json_invalid":
        return "request body is not valid JSON"
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{field}: {message}" if field else message


class ShortenRequest(BaseModel):
    """Request to create a short link.

    Shared by the HTTP route and the shortening service so both entry points
    reject the same inputs before the store is touched.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: StrictStr = Field(
        ..., max_length=MAX_URL_LENGTH, description="Destination URL, stored verbatim"
    )
    duration_millis: Union[StrictInt, StrictFloat] = Field(
        ...,
        validation_alias=AliasChoices("durationMillis", "expirationTime", "duration_millis"),
        description="Milliseconds until the link expires",
    )

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("url is required")
        return value

    @field_validator("duration_millis")
    @classmethod
    def duration_in_range(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("durationMillis must be a positive number")
        if value > MAX_DURATION_MILLIS:
            raise ValueError("durationMillis is too large")
        return value

    @property
    def ttl_millis(self) -> int:
        """Duration as whole milliseconds, rounded up."""
        return math.ceil(self.duration_millis)


class ShortLink(BaseModel):
    """A stored short link record. Timestamps are epoch milliseconds."""

    slug: str
    url: str
    created_at: int
    expires_at: int

    def is_expired(self, now: int) -> bool:
        """Return True once now has reached the expiry instant."""
        return now >= self.expires_at
