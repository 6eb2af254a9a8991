"""Middleware package for the short links service."""

from .edge import EdgeRouterMiddleware, candidate_slug

__all__ = ["EdgeRouterMiddleware", "candidate_slug"]
