"""Error taxonomy for the short links service.

Every error carries the message and HTTP status it is rendered with at the
request boundary.
"""

from typing import Optional


class ShortLinkError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(ShortLinkError):
    """Raised when request input is missing or malformed."""

    status_code = 400
    default_message = "invalid request"


class MissingSlug(InvalidRequest):
    """Raised when a lookup is attempted without a usable slug."""

    status_code = 404
    default_message = "use with a slug"


class LinkNotFound(ShortLinkError):
    """Raised when a slug does not exist in the store."""

    status_code = 404
    default_message = "slug not found"


class LinkExpired(LinkNotFound):
    """Raised when a slug existed but was past its expiry and got removed."""

    default_message = "link expired"


class SlugConflict(ShortLinkError):
    """Raised by a store when a slug is already taken."""

    status_code = 409
    default_message = "slug already exists"


class StoreFailure(ShortLinkError):
    """Raised when the persistence layer fails."""

    default_message = "internal storage error"
