"""API routes."""

from . import health, posts, search

__all__ = ["health", "posts", "search"]
