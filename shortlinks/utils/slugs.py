"""Slug generation utilities module.

This module handles the generation and validation of slugs and the
building of shareable short URLs.
"""

import re
import secrets
import string
import logging
from typing import Optional

logger = logging.getLogger(__name__)


# URL-safe characters allowed in slugs
ALPHABET = string.ascii_letters + string.digits + "_-"

DEFAULT_SLUG_LENGTH = 7
MAX_SLUG_LENGTH = 64

# Path names served by the application itself
RESERVED_SLUGS = frozenset({"shorten", "resolve", "health", "docs", "redoc"})

_SLUG_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def generate_slug(length: Optional[int] = None) -> str:
    """Generate a random slug from a secure random source.

    Args:
        length: Length of the generated slug. Defaults to 7.

    Returns:
        Random slug string that is not a reserved path name.
    """
    length = length or DEFAULT_SLUG_LENGTH
    while True:
        slug = "".join(secrets.choice(ALPHABET) for _ in range(length))
        if slug.lower() not in RESERVED_SLUGS:
            return slug
        logger.debug(f"Skipping reserved slug: {slug}")


def validate_slug(slug: object) -> bool:
    """Validate slug format.

    Args:
        slug: Candidate slug to validate.

    Returns:
        True if the value is a non-empty string in the slug alphabet.
    """
    if not isinstance(slug, str) or not slug:
        return False
    if len(slug) > MAX_SLUG_LENGTH:
        return False
    return bool(_SLUG_PATTERN.fullmatch(slug))


def build_short_url(base_url: str, slug: str) -> str:
    """Create the full short URL from the service base URL and a slug.

    Args:
        base_url: Base URL of the service.
        slug: Slug.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{slug}"
