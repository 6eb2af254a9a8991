"""Utils package for the short links service."""

from .clock import Clock, now_millis
from .slugs import (
    ALPHABET,
    RESERVED_SLUGS,
    generate_slug,
    validate_slug,
    build_short_url,
)

__all__ = [
    "Clock",
    "now_millis",
    "ALPHABET",
    "RESERVED_SLUGS",
    "generate_slug",
    "validate_slug",
    "build_short_url",
]
