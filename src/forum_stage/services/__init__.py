# src/forum_stage/services/__init__.py
"""Business logic services for the Forum Stage application."""

from .authorization import AuthorizationService
from .identity import Identity, IdentityResolver
from .post_service import PostService

__all__ = [
    "AuthorizationService",
    "Identity",
    "IdentityResolver",
    "PostService",
]
