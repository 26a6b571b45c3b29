# src/forum_stage/models/post.py
"""SQLAlchemy models for posts and related attributes."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import utcnow


class Post(Base):
    """Primary content entity submitted to a community.

    Posts are never hard-deleted; the ``deleted`` flag is the owner's soft
    delete and ``removed`` is the moderator's.
    """

    __tablename__ = "post"
    __table_args__ = (Index("ix_post_community_id", "community_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), nullable=False
    )
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), nullable=False
    )

    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    # Null until the first edit.
    updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class PostSaved(Base):
    """Bookmark of a post by a user."""

    __tablename__ = "post_saved"

    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), primary_key=True
    )
    # Composite primary key makes a second bookmark of the same pair impossible.
    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
