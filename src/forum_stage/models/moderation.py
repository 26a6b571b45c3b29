# src/forum_stage/models/moderation.py
"""Models recording moderator actions taken on posts."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import utcnow


class ModRemovePost(Base):
    """Audit entry for a removal or restoration of a post."""

    __tablename__ = "mod_remove_post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), nullable=False
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    removed: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=True)
    when_: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class ModLockPost(Base):
    """Audit entry for a lock or unlock of a post."""

    __tablename__ = "mod_lock_post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_.id", ondelete="CASCADE"), nullable=False
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    locked: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=True)
    when_: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
