# src/forum_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import operations_router, posts_router

__all__ = [
    "operations_router",
    "posts_router",
]
