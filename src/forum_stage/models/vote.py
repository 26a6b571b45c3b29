"""Models capturing voting interactions on posts."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
)
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import utcnow


class PostLike(Base):
    """Per-user vote on a post.

    Only +1 and -1 are ever stored; a cleared vote is the absence of a row.
    """

    __tablename__ = "post_like"
    __table_args__ = (
        CheckConstraint("score IN (1, -1)", name="ck_post_like_score"),
        Index("ix_post_like_post_id", "post_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Composite primary key prevents duplicate votes from the same user.

    # 1 = upvote, -1 = downvote.
    score: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    published: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
