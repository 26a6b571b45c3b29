# src/forum_stage/schemas/post.py
"""Post-related Pydantic schemas.

Request field names (``type_``, ``edit_id``, ``auth`` ...) are part of the wire
contract and must stay stable.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .comment import CommentView
from .community import CommunityModeratorView, CommunityView
from .user import UserView

NAME_MAX_LENGTH = 100


class ListingType(str, Enum):
    """Which communities a listing draws posts from."""

    ALL = "All"
    SUBSCRIBED = "Subscribed"
    COMMUNITY = "Community"


class SortType(str, Enum):
    """Ordering applied to post listings."""

    HOT = "Hot"
    NEW = "New"
    TOP_DAY = "TopDay"
    TOP_WEEK = "TopWeek"
    TOP_MONTH = "TopMonth"
    TOP_YEAR = "TopYear"
    TOP_ALL = "TopAll"


class CreatePost(BaseModel):
    """Schema for creating a new post."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    url: str | None = None
    body: str | None = None
    nsfw: bool = False
    community_id: int
    auth: str | None = Field(None, description="Bearer token of the author")


class GetPost(BaseModel):
    """Schema for reading one post with its context."""

    id: int
    auth: str | None = None


class GetPosts(BaseModel):
    """Schema for a filtered, paginated post listing.

    ``type_`` and ``sort`` stay raw strings here so an unknown token is
    reported as a bad request by the service rather than a schema error.
    """

    type_: str = Field(..., description="Listing type: All, Subscribed or Community")
    sort: str = Field(..., description="Sort: Hot, New, TopDay, TopWeek, TopMonth, TopYear, TopAll")
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)
    community_id: int | None = None
    auth: str | None = None


class CreatePostLike(BaseModel):
    """Schema for voting on a post; any score outside {-1, 1} clears the vote."""

    post_id: int
    score: int
    auth: str | None = None


class EditPost(BaseModel):
    """Schema for editing a post, including moderator flag changes.

    ``removed``, ``deleted`` and ``locked`` are tri-state: omitted (None)
    leaves the stored flag untouched.
    """

    edit_id: int
    creator_id: int
    community_id: int
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    url: str | None = None
    body: str | None = None
    removed: bool | None = None
    deleted: bool | None = None
    nsfw: bool = False
    locked: bool | None = None
    reason: str | None = None
    auth: str | None = None


class SavePost(BaseModel):
    """Schema for saving or unsaving a post."""

    post_id: int
    save: bool
    auth: str | None = None


class PostView(BaseModel):
    """Post with its aggregated votes and the viewer's own state."""

    id: int
    name: str
    url: str | None
    body: str | None
    creator_id: int
    community_id: int
    removed: bool
    deleted: bool
    locked: bool
    nsfw: bool
    published: datetime
    updated: datetime | None
    creator_name: str
    community_name: str
    number_of_comments: int
    score: int
    upvotes: int
    downvotes: int
    hot_rank: int
    user_id: int | None = None
    my_vote: int = 0
    saved: bool = False
    subscribed: bool = False

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Single-post response shared by create, vote, edit and save."""

    op: str
    post: PostView


class GetPostResponse(BaseModel):
    """Post together with comments, community, moderators and admins."""

    op: str
    post: PostView
    comments: list[CommentView]
    community: CommunityView
    moderators: list[CommunityModeratorView]
    admins: list[UserView]


class GetPostsResponse(BaseModel):
    """Page of posts for a listing request."""

    op: str
    posts: list[PostView]
