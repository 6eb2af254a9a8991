"""Short link creation."""

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..core.exceptions import InvalidRequest, SlugConflict, StoreFailure
from ..core.store import LinkStore
from ..models.link import ShortenRequest, ShortLink, describe_errors
from ..utils.clock import Clock, now_millis
from ..utils.slugs import DEFAULT_SLUG_LENGTH, generate_slug

logger = logging.getLogger(__name__)


class ShorteningService:
    """Validates creation requests and writes new short links."""

    def __init__(
        self,
        store: LinkStore,
        slug_length: int = DEFAULT_SLUG_LENGTH,
        max_attempts: int = 5,
        clock: Clock = now_millis,
        slug_factory: Optional[Callable[[int], str]] = None,
    ):
        self.store = store
        self.slug_length = slug_length
        self.max_attempts = max_attempts
        self.clock = clock
        self.slug_factory = slug_factory or generate_slug

    def create(self, url: object, duration_millis: object) -> ShortLink:
        """Create a short link for url that expires after duration_millis.

        Args:
            url: Destination URL.
            duration_millis: Milliseconds until the link expires.

        Returns:
            The stored record.

        Raises:
            InvalidRequest: url is missing or blank, or the duration is not a
                positive number.
            StoreFailure: The record could not be written.
        """
        try:
            request = ShortenRequest.model_validate(
                {"url": url, "durationMillis": duration_millis}
            )
        except ValidationError as e:
            raise InvalidRequest(describe_errors(e.errors())) from e
        return self.create_from_request(request)

    def create_from_request(self, request: ShortenRequest) -> ShortLink:
        """Create a short link from an already validated request."""
        created_at = self.clock()
        expires_at = created_at + request.ttl_millis

        for attempt in range(1, self.max_attempts + 1):
            link = ShortLink(
                slug=self.slug_factory(self.slug_length),
                url=request.url,
                created_at=created_at,
                expires_at=expires_at,
            )
            try:
                self.store.insert(link)
            except SlugConflict:
                logger.warning(
                    f"Slug collision on {link.slug} (attempt {attempt}/{self.max_attempts})"
                )
                continue
            logger.info(f"Created short link: {link.slug}")
            return link

        logger.error(f"Failed to generate unique slug after {self.max_attempts} attempts")
        raise StoreFailure("Failed to generate unique slug")
