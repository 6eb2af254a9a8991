"""Link store contract and an in-memory implementation."""

import logging
from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict, NamedTuple, Optional

from ..models.link import ShortLink
from .exceptions import SlugConflict

logger = logging.getLogger(__name__)


class Lookup(NamedTuple):
    """Outcome of an atomic read-and-expire."""

    link: Optional[ShortLink]
    expired: bool = False


class LinkStore(ABC):
    """Persistent record storage keyed by slug."""

    @abstractmethod
    def init_db(self) -> None:
        """Create the schema if missing."""

    @abstractmethod
    def close(self) -> None:
        """Release any held resources."""

    @abstractmethod
    def insert(self, link: ShortLink) -> None:
        """Write a new record. Raises SlugConflict if the slug is taken."""

    @abstractmethod
    def get(self, slug: str) -> Optional[ShortLink]:
        """Return the record stored under slug, expired or not."""

    @abstractmethod
    def delete(self, slug: str) -> bool:
        """Remove a record. Returns True if one was removed."""

    @abstractmethod
    def lookup(self, slug: str, now: int) -> Lookup:
        """Read a record and delete it if expired at now, atomically."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored records, live or expired."""


class MemoryLinkStore(LinkStore):
    """Thread-safe dict-backed store."""

    def __init__(self) -> None:
        self._links: Dict[str, ShortLink] = {}
        self._lock = Lock()

    def init_db(self) -> None:
        pass

    def close(self) -> None:
        pass

    def insert(self, link: ShortLink) -> None:
        with self._lock:
            if link.slug in self._links:
                raise SlugConflict()
            self._links[link.slug] = link

    def get(self, slug: str) -> Optional[ShortLink]:
        with self._lock:
            return self._links.get(slug)

    def delete(self, slug: str) -> bool:
        with self._lock:
            return self._links.pop(slug, None) is not None

    def lookup(self, slug: str, now: int) -> Lookup:
        with self._lock:
            link = self._links.get(slug)
            if link is None:
                return Lookup(None)
            if link.is_expired(now):
                del self._links[slug]
                logger.info(f"Deleted expired short link: {slug}")
                return Lookup(link, expired=True)
            return Lookup(link)

    def count(self) -> int:
        with self._lock:
            return len(self._links)
