"""Shared API dependencies for sessions and the post service."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from forum_stage.db.session import get_db
from forum_stage.services.identity import IdentityResolver
from forum_stage.services.post_service import PostService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_identity_resolver() -> IdentityResolver:
    """Return the token resolver used by post operations."""
    return IdentityResolver()


IdentityResolverDep = Annotated[IdentityResolver, Depends(get_identity_resolver)]


def get_post_service(db: SessionDep, identity: IdentityResolverDep) -> PostService:
    """Build a post service bound to the request's database session."""
    return PostService(db, identity)


# Type alias for post service dependency
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
