# src/forum_stage/models/__init__.py
"""SQLAlchemy models for the Forum Stage application."""

from .comment import Comment
from .community import Community, CommunityFollower, CommunityModerator, CommunityUserBan
from .moderation import ModLockPost, ModRemovePost
from .post import Post, PostSaved
from .user import Site, User
from .vote import PostLike

__all__ = [
    "Comment",
    "Community", "CommunityFollower", "CommunityModerator", "CommunityUserBan",
    "ModLockPost", "ModRemovePost",
    "Post", "PostSaved",
    "Site", "User",
    "PostLike",
]
