"""Short links service: expiring short URLs with lazy expiry on visit."""

__version__ = "0.1.0"
