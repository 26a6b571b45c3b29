# src/forum_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentView
from .common import ErrorResponse, Operation
from .community import CommunityModeratorView, CommunityView
from .post import (
    CreatePost,
    CreatePostLike,
    EditPost,
    GetPost,
    GetPostResponse,
    GetPosts,
    GetPostsResponse,
    ListingType,
    PostResponse,
    PostView,
    SavePost,
    SortType,
)
from .user import UserView

__all__ = [
    "CommentView",
    "ErrorResponse", "Operation",
    "CommunityModeratorView", "CommunityView",
    "CreatePost", "CreatePostLike", "EditPost", "GetPost", "GetPostResponse",
    "GetPosts", "GetPostsResponse", "ListingType", "PostResponse", "PostView",
    "SavePost", "SortType",
    "UserView",
]
