"""Models package for the short links service."""

from .link import (
    ShortenRequest,
    ShortLink,
    describe_errors,
    millis_to_datetime,
)

__all__ = [
    "ShortenRequest",
    "ShortLink",
    "describe_errors",
    "millis_to_datetime",
]
