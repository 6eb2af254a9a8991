"""Slug resolution with lazy expiry."""

from ..core.exceptions import LinkExpired, LinkNotFound, MissingSlug
from ..core.store import LinkStore
from ..models.link import ShortLink
from ..utils.clock import Clock, now_millis


class ResolutionService:
    """Looks up slugs and enforces expiry on read."""

    def __init__(self, store: LinkStore, clock: Clock = now_millis):
        self.store = store
        self.clock = clock

    def resolve(self, slug: object) -> ShortLink:
        """Return the live record for slug.

        An expired record is deleted as part of the lookup and reported as
        not found.

        Raises:
            MissingSlug: slug is missing, empty or not a string.
            LinkExpired: slug existed but had expired.
            LinkNotFound: slug is not stored.
        """
        if not isinstance(slug, str) or not slug:
            raise MissingSlug()

        lookup = self.store.lookup(slug, self.clock())
        if lookup.link is None:
            raise LinkNotFound()
        if lookup.expired:
            raise LinkExpired()
        return lookup.link
