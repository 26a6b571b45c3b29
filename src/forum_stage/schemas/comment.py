"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommentView(BaseModel):
    """Comment as shown alongside its post."""

    id: int
    creator_id: int
    creator_name: str
    post_id: int
    parent_id: int | None
    content: str
    removed: bool
    deleted: bool
    published: datetime
    updated: datetime | None

    model_config = ConfigDict(from_attributes=True)
