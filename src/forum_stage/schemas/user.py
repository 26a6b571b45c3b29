"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserView(BaseModel):
    """Public projection of a user account."""

    id: int
    name: str
    admin: bool
    banned: bool
    published: datetime

    model_config = ConfigDict(from_attributes=True)
