# src/forum_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .operations import router as operations_router
from .posts import router as posts_router

__all__ = [
    "operations_router",
    "posts_router",
]
