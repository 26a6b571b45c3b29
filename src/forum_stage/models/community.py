"""SQLAlchemy models for communities and their membership rosters."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import utcnow


class Community(Base):
    """Community metadata used for grouping posts."""

    __tablename__ = "community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Handle-like unique name.
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_.id"), nullable=False)
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CommunityModerator(Base):
    """Roster entry granting a user moderator authority over one community."""

    __tablename__ = "community_moderator"

    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), primary_key=True
    )
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CommunityUserBan(Base):
    """Active ban of a user from a single community."""

    __tablename__ = "community_user_ban"

    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), primary_key=True
    )
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CommunityFollower(Base):
    """Subscription of a user to a community; drives the Subscribed listing."""

    __tablename__ = "community_follower"

    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), primary_key=True
    )
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
