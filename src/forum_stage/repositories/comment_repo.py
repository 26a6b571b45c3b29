"""Read-only comment listing used when showing a post."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_stage.models import Comment, User
from forum_stage.schemas.comment import CommentView

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def list_for_post(self, post_id: int, limit: int) -> list[CommentView]:
        """Return a post's comments, newest first."""
        rows = self.session.execute(
            select(Comment, User.name.label("creator_name"))
            .join(User, User.id == Comment.creator_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.published.desc(), Comment.id.desc())
            .limit(limit)
        )
        views: list[CommentView] = []
        for row in rows:
            comment: Comment = row.Comment
            views.append(
                CommentView(
                    id=comment.id,
                    creator_id=comment.creator_id,
                    creator_name=row.creator_name,
                    post_id=comment.post_id,
                    parent_id=comment.parent_id,
                    content=comment.content,
                    removed=comment.removed,
                    deleted=comment.deleted,
                    published=comment.published,
                    updated=comment.updated,
                )
            )
        return views
