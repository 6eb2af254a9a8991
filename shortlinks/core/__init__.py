"""Core package - configuration, errors and link storage."""

from .config import Settings, get_settings
from .database import Database
from .exceptions import (
    ShortLinkError,
    InvalidRequest,
    MissingSlug,
    LinkNotFound,
    LinkExpired,
    SlugConflict,
    StoreFailure,
)
from .store import LinkStore, Lookup, MemoryLinkStore

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "LinkStore",
    "Lookup",
    "MemoryLinkStore",
    "ShortLinkError",
    "InvalidRequest",
    "MissingSlug",
    "LinkNotFound",
    "LinkExpired",
    "SlugConflict",
    "StoreFailure",
]
