"""Community-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommunityView(BaseModel):
    """Community metadata with aggregate counts and viewer subscription state."""

    id: int
    name: str
    title: str
    description: str | None
    creator_id: int
    creator_name: str
    removed: bool
    deleted: bool
    nsfw: bool
    published: datetime
    number_of_subscribers: int
    number_of_posts: int
    user_id: int | None = None
    subscribed: bool = False

    model_config = ConfigDict(from_attributes=True)


class CommunityModeratorView(BaseModel):
    """Moderator roster entry for a community."""

    community_id: int
    user_id: int
    user_name: str
    community_name: str
    published: datetime

    model_config = ConfigDict(from_attributes=True)
