"""Data access helpers for working with posts and their read views."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from sqlalchemy import Select, and_, case, desc, false, func, literal, select
from sqlalchemy.orm import Session, aliased

from forum_stage.db.time import utcnow
from forum_stage.models import (
    Comment,
    Community,
    CommunityFollower,
    Post,
    PostLike,
    PostSaved,
    User,
)
from forum_stage.schemas.post import ListingType, PostView, SortType
from forum_stage.utils.ranking import hot_rank

__all__ = ["FlagEdit", "PostForm", "PostRepository"]

# Look-back windows for the Top sorts; TopAll has none.
_TOP_WINDOWS: dict[SortType, timedelta] = {
    SortType.TOP_DAY: timedelta(days=1),
    SortType.TOP_WEEK: timedelta(weeks=1),
    SortType.TOP_MONTH: timedelta(days=30),
    SortType.TOP_YEAR: timedelta(days=365),
}


class FlagEdit(Enum):
    """Edit intent for a moderation flag; distinguishes "leave as is" from "set false"."""

    UNCHANGED = "unchanged"
    SET_TRUE = "set_true"
    SET_FALSE = "set_false"

    @classmethod
    def from_optional(cls, value: bool | None) -> FlagEdit:
        """Map an optional wire boolean onto an edit intent."""
        if value is None:
            return cls.UNCHANGED
        return cls.SET_TRUE if value else cls.SET_FALSE

    def apply(self, current: bool) -> bool:
        """Return the flag value after applying this intent to ``current``."""
        if self is FlagEdit.UNCHANGED:
            return current
        return self is FlagEdit.SET_TRUE


@dataclass(frozen=True)
class PostForm:
    """Complete set of writable post fields.

    Content fields are always written as given (a missing url or body becomes
    null); the moderation flags follow their ``FlagEdit`` intent.
    """

    name: str
    creator_id: int
    community_id: int
    url: str | None = None
    body: str | None = None
    nsfw: bool = False
    removed: FlagEdit = FlagEdit.UNCHANGED
    deleted: FlagEdit = FlagEdit.UNCHANGED
    locked: FlagEdit = FlagEdit.UNCHANGED


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(self, form: PostForm) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(
            name=form.name,
            url=form.url,
            body=form.body,
            creator_id=form.creator_id,
            community_id=form.community_id,
            nsfw=form.nsfw,
            removed=form.removed.apply(False),
            deleted=form.deleted.apply(False),
            locked=form.locked.apply(False),
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def read(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def update(self, post_id: int, form: PostForm, *, commit: bool = True) -> Post | None:
        """Replace the post's writable fields and stamp the update time.

        With ``commit=False`` the change is only flushed so the caller can
        commit it together with related writes.

        Returns:
            The updated post, or None if no post has this id.
        """
        post = self.read(post_id)
        if post is None:
            return None

        post.name = form.name
        post.url = form.url
        post.body = form.body
        post.creator_id = form.creator_id
        post.community_id = form.community_id
        post.nsfw = form.nsfw
        post.removed = form.removed.apply(post.removed)
        post.deleted = form.deleted.apply(post.deleted)
        post.locked = form.locked.apply(post.locked)
        post.updated = utcnow()

        if not commit:
            self.session.flush()
            return post
        self.session.commit()
        self.session.refresh(post)
        return post

    def read_view(self, post_id: int, viewer_id: int | None = None) -> PostView | None:
        """Return the denormalized view of one post as seen by ``viewer_id``."""
        row = self.session.execute(
            self._view_query(viewer_id).where(Post.id == post_id)
        ).first()
        if row is None:
            return None
        return self._to_view(row, viewer_id)

    def list_views(
        self,
        *,
        listing_type: ListingType,
        sort: SortType,
        viewer_id: int | None = None,
        show_nsfw: bool = False,
        community_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
        default_limit: int = 10,
    ) -> list[PostView]:
        """Return one page of visible posts for a listing.

        Removed and deleted posts (or posts in removed/deleted communities) are
        never listed. Page numbers start at 1. Every sort, Hot included, is
        ordered and paginated by the database.
        """
        if listing_type is ListingType.SUBSCRIBED and viewer_id is None:
            return []

        stmt = self._view_query(viewer_id).where(
            Post.removed.is_(False),
            Post.deleted.is_(False),
            Community.removed.is_(False),
            Community.deleted.is_(False),
        )

        if community_id is not None:
            stmt = stmt.where(Post.community_id == community_id)

        if listing_type is ListingType.SUBSCRIBED:
            stmt = stmt.where(CommunityFollower.user_id.is_not(None))

        if not show_nsfw:
            stmt = stmt.where(Post.nsfw.is_(False), Community.nsfw.is_(False))

        window = _TOP_WINDOWS.get(sort)
        if window is not None:
            stmt = stmt.where(Post.published >= utcnow() - window)

        page_size = limit or default_limit
        offset = ((page or 1) - 1) * page_size

        if sort is SortType.HOT:
            # Hot rank decays with age, so it is evaluated per query, not stored.
            rank = func.hot_rank(stmt.selected_columns.score, Post.published)
            stmt = stmt.order_by(rank.desc(), Post.published.desc(), Post.id.desc())
        elif sort is SortType.NEW:
            stmt = stmt.order_by(Post.published.desc(), Post.id.desc())
        else:
            stmt = stmt.order_by(desc("score"), Post.published.desc(), Post.id.desc())

        rows = self.session.execute(stmt.offset(offset).limit(page_size))
        return [self._to_view(row, viewer_id) for row in rows]

    def _view_query(self, viewer_id: int | None) -> Select[Any]:
        likes = (
            select(
                PostLike.post_id.label("post_id"),
                func.sum(PostLike.score).label("score"),
                func.sum(case((PostLike.score == 1, 1), else_=0)).label("upvotes"),
                func.sum(case((PostLike.score == -1, 1), else_=0)).label("downvotes"),
            )
            .group_by(PostLike.post_id)
            .subquery()
        )
        comments = (
            select(
                Comment.post_id.label("post_id"),
                func.count(Comment.id).label("number_of_comments"),
            )
            .group_by(Comment.post_id)
            .subquery()
        )

        stmt = (
            select(
                Post,
                User.name.label("creator_name"),
                Community.name.label("community_name"),
                func.coalesce(likes.c.score, 0).label("score"),
                func.coalesce(likes.c.upvotes, 0).label("upvotes"),
                func.coalesce(likes.c.downvotes, 0).label("downvotes"),
                func.coalesce(comments.c.number_of_comments, 0).label("number_of_comments"),
            )
            .join(User, User.id == Post.creator_id)
            .join(Community, Community.id == Post.community_id)
            .outerjoin(likes, likes.c.post_id == Post.id)
            .outerjoin(comments, comments.c.post_id == Post.id)
        )

        if viewer_id is None:
            return stmt.add_columns(
                literal(0).label("my_vote"),
                false().label("saved"),
                false().label("subscribed"),
            )

        my_like = aliased(PostLike)
        return (
            stmt.outerjoin(
                my_like,
                and_(my_like.post_id == Post.id, my_like.user_id == viewer_id),
            )
            .outerjoin(
                PostSaved,
                and_(PostSaved.post_id == Post.id, PostSaved.user_id == viewer_id),
            )
            .outerjoin(
                CommunityFollower,
                and_(
                    CommunityFollower.community_id == Post.community_id,
                    CommunityFollower.user_id == viewer_id,
                ),
            )
            .add_columns(
                func.coalesce(my_like.score, 0).label("my_vote"),
                PostSaved.post_id.is_not(None).label("saved"),
                CommunityFollower.user_id.is_not(None).label("subscribed"),
            )
        )

    @staticmethod
    def _to_view(row: Any, viewer_id: int | None) -> PostView:
        post: Post = row.Post
        score = int(row.score)
        return PostView(
            id=post.id,
            name=post.name,
            url=post.url,
            body=post.body,
            creator_id=post.creator_id,
            community_id=post.community_id,
            removed=post.removed,
            deleted=post.deleted,
            locked=post.locked,
            nsfw=post.nsfw,
            published=post.published,
            updated=post.updated,
            creator_name=row.creator_name,
            community_name=row.community_name,
            number_of_comments=int(row.number_of_comments),
            score=score,
            upvotes=int(row.upvotes),
            downvotes=int(row.downvotes),
            hot_rank=hot_rank(score, post.published),
            user_id=viewer_id,
            my_vote=int(row.my_vote),
            saved=bool(row.saved),
            subscribed=bool(row.subscribed),
        )
