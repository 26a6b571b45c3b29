"""Orchestration of the public post operations.

Every operation resolves the caller's identity, authorizes, mutates storage
and finishes by re-reading the canonical ``PostView``; nothing returned to
the caller is assembled from in-memory state.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.core.settings import settings
from forum_stage.models import Post
from forum_stage.repositories.comment_repo import CommentRepository
from forum_stage.repositories.community_repo import CommunityRepository
from forum_stage.repositories.modlog_repo import ModerationLog
from forum_stage.repositories.post_repo import FlagEdit, PostForm, PostRepository
from forum_stage.repositories.save_repo import SaveLedger
from forum_stage.repositories.user_repo import UserRepository
from forum_stage.repositories.vote_repo import VoteLedger
from forum_stage.schemas.common import Operation
from forum_stage.schemas.post import (
    CreatePost,
    CreatePostLike,
    EditPost,
    GetPost,
    GetPostResponse,
    GetPosts,
    GetPostsResponse,
    ListingType,
    PostResponse,
    PostView,
    SavePost,
    SortType,
)
from forum_stage.schemas.user import UserView
from forum_stage.services.authorization import AuthorizationService
from forum_stage.services.content_policy import ensure_allowed
from forum_stage.services.identity import IdentityResolver

logger = logging.getLogger(__name__)


def order_admins(admins: Iterable[UserView], site_creator_id: int | None) -> list[UserView]:
    """Return the admins with the site creator, if among them, moved to the front.

    This is a display convention only; it carries no authorization meaning.
    """
    ordered = list(admins)
    for index, admin in enumerate(ordered):
        if admin.id == site_creator_id:
            ordered.insert(0, ordered.pop(index))
            break
    return ordered


def parse_listing(op: str, type_: str, sort: str) -> tuple[ListingType, SortType]:
    """Parse listing and sort tokens, rejecting unknown values as ``BadRequest``."""
    try:
        return ListingType(type_), SortType(sort)
    except ValueError as exc:
        raise PostApiError(op, ErrorCode.BAD_REQUEST) from exc


class PostService:
    """Create, read, list, vote on, edit and save posts."""

    def __init__(self, db: Session, identity: IdentityResolver | None = None) -> None:
        """Wire the repositories and ledgers around a single request session.

        Args:
            db: Session owned by the current request.
            identity: Token resolver; a default JWT resolver is used if omitted.
        """
        self.db = db
        self.identity = identity or IdentityResolver()
        self.posts = PostRepository(db)
        self.votes = VoteLedger(db)
        self.saves = SaveLedger(db)
        self.modlog = ModerationLog(db)
        self.comments = CommentRepository(db)
        self.communities = CommunityRepository(db)
        self.users = UserRepository(db)
        self.authz = AuthorizationService(db)

    @contextmanager
    def _storage_errors(self, op: str, code: ErrorCode) -> Iterator[None]:
        """Roll back and re-raise storage failures as ``code`` for ``op``."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("%s failed (%s)", op, code.value, exc_info=exc)
            raise PostApiError(op, code) from exc

    def _require_post(self, op: str, post_id: int) -> Post:
        post = self.posts.read(post_id)
        if post is None:
            raise PostApiError(op, ErrorCode.NOT_FOUND)
        return post

    def _fresh_view(
        self, op: str, post_id: int, viewer_id: int | None, failure: ErrorCode
    ) -> PostView:
        with self._storage_errors(op, failure):
            view = self.posts.read_view(post_id, viewer_id)
        if view is None:
            raise PostApiError(op, ErrorCode.NOT_FOUND)
        return view

    def create_post(self, data: CreatePost) -> PostResponse:
        """Create a post and record the author's own upvote.

        A failed self-vote is reported as ``CouldntLikePost``; the post itself
        stays created.
        """
        op = Operation.CREATE_POST.value
        identity = self.identity.require(op, data.auth)
        ensure_allowed(op, data.name, data.body)

        with self._storage_errors(op, ErrorCode.COULDNT_CREATE_POST):
            self.authz.check_bans(op, identity.id, data.community_id)
            post = self.posts.create(
                PostForm(
                    name=data.name,
                    url=data.url,
                    body=data.body,
                    creator_id=identity.id,
                    community_id=data.community_id,
                    nsfw=data.nsfw,
                )
            )
            post_id = post.id
        logger.info("User %s created post %s in community %s", identity.id, post_id, data.community_id)

        # They like their own post by default.
        with self._storage_errors(op, ErrorCode.COULDNT_LIKE_POST):
            self.votes.replace(post_id, identity.id, 1)

        view = self._fresh_view(op, post_id, identity.id, ErrorCode.COULDNT_CREATE_POST)
        return PostResponse(op=op, post=view)

    def get_post(self, data: GetPost) -> GetPostResponse:
        """Return a post with its comments, community, moderators and admins."""
        op = Operation.GET_POST.value
        identity = self.identity.resolve(data.auth)
        viewer_id = identity.id if identity else None

        post = self._fresh_view(op, data.id, viewer_id, ErrorCode.COULDNT_GET_POST)
        with self._storage_errors(op, ErrorCode.COULDNT_GET_POST):
            comments = self.comments.list_for_post(data.id, settings.post_comment_fetch_limit)
            community = self.communities.read_view(post.community_id, viewer_id)
            moderators = self.communities.moderators(post.community_id)
            admins = order_admins(
                self.users.admins(),
                self.users.site_creator_id(settings.site_id),
            )
        if community is None:
            raise PostApiError(op, ErrorCode.NOT_FOUND)

        return GetPostResponse(
            op=op,
            post=post,
            comments=comments,
            community=community,
            moderators=moderators,
            admins=admins,
        )

    def get_posts(self, data: GetPosts) -> GetPostsResponse:
        """Return one page of posts for the requested listing and sort."""
        op = Operation.GET_POSTS.value
        identity = self.identity.resolve(data.auth)
        viewer_id = identity.id if identity else None
        show_nsfw = identity.show_nsfw if identity else False

        listing_type, sort = parse_listing(op, data.type_, data.sort)

        with self._storage_errors(op, ErrorCode.COULDNT_GET_POSTS):
            posts = self.posts.list_views(
                listing_type=listing_type,
                sort=sort,
                viewer_id=viewer_id,
                show_nsfw=show_nsfw,
                community_id=data.community_id,
                page=data.page,
                limit=data.limit,
                default_limit=settings.default_page_limit,
            )
        return GetPostsResponse(op=op, posts=posts)

    def create_post_like(self, data: CreatePostLike) -> PostResponse:
        """Record, replace or clear the caller's vote on a post."""
        op = Operation.CREATE_POST_LIKE.value
        identity = self.identity.require(op, data.auth)

        with self._storage_errors(op, ErrorCode.COULDNT_LIKE_POST):
            post = self._require_post(op, data.post_id)
            self.authz.check_bans(op, identity.id, post.community_id)
            self.votes.replace(data.post_id, identity.id, data.score)

        view = self._fresh_view(op, data.post_id, identity.id, ErrorCode.COULDNT_LIKE_POST)
        return PostResponse(op=op, post=view)

    def edit_post(self, data: EditPost) -> PostResponse:
        """Apply an edit from the creator, a community moderator or a site admin.

        Authority and bans are checked against the stored post. Authorship is
        fixed: a ``creator_id`` other than the stored creator is refused. Moving
        the post to another community also needs edit authority and a clean ban
        record in the destination community.

        The update and any moderation log entries commit together; supplied
        ``removed``/``locked`` flags are logged whether or not they change the
        stored value.
        """
        op = Operation.EDIT_POST.value
        ensure_allowed(op, data.name, data.body)
        identity = self.identity.require(op, data.auth)

        with self._storage_errors(op, ErrorCode.COULDNT_UPDATE_POST):
            post = self._require_post(op, data.edit_id)
            self.authz.ensure_can_edit(op, identity.id, post)
            self.authz.check_bans(op, identity.id, post.community_id)

            if data.creator_id != post.creator_id:
                logger.info(
                    "User %s may not reassign post %s to user %s",
                    identity.id,
                    post.id,
                    data.creator_id,
                )
                raise PostApiError(op, ErrorCode.EDIT_NOT_ALLOWED)
            if data.community_id != post.community_id:
                self.authz.ensure_can_edit(
                    op, identity.id, post, community_id=data.community_id
                )
                self.authz.check_bans(op, identity.id, data.community_id)

            self.posts.update(
                data.edit_id,
                PostForm(
                    name=data.name,
                    url=data.url,
                    body=data.body,
                    creator_id=post.creator_id,
                    community_id=data.community_id,
                    nsfw=data.nsfw,
                    removed=FlagEdit.from_optional(data.removed),
                    deleted=FlagEdit.from_optional(data.deleted),
                    locked=FlagEdit.from_optional(data.locked),
                ),
                commit=False,
            )

            if data.removed is not None:
                self.modlog.record_removal(
                    identity.id, data.edit_id, data.removed, data.reason, commit=False
                )
            if data.locked is not None:
                self.modlog.record_lock(identity.id, data.edit_id, data.locked, commit=False)
            self.db.commit()

        return PostResponse(
            op=op,
            post=self._fresh_view(op, data.edit_id, identity.id, ErrorCode.COULDNT_UPDATE_POST),
        )

    def save_post(self, data: SavePost) -> PostResponse:
        """Save or unsave a post for the caller."""
        op = Operation.SAVE_POST.value
        identity = self.identity.require(op, data.auth)

        with self._storage_errors(op, ErrorCode.COULDNT_SAVE_POST):
            self._require_post(op, data.post_id)
            self.saves.set(data.post_id, identity.id, data.save)

        return PostResponse(
            op=op,
            post=self._fresh_view(op, data.post_id, identity.id, ErrorCode.COULDNT_SAVE_POST),
        )
