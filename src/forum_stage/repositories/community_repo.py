"""Read access to communities, their moderator rosters and ban lists."""
from __future__ import annotations

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from forum_stage.models import (
    Community,
    CommunityFollower,
    CommunityModerator,
    CommunityUserBan,
    Post,
    User,
)
from forum_stage.schemas.community import CommunityModeratorView, CommunityView

__all__ = ["CommunityRepository"]


class CommunityRepository:
    """Thin wrapper around database access for community collaborator data."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def is_user_banned(self, user_id: int, community_id: int) -> bool:
        """Return True if an active ban exists for the user in the community."""
        ban = self.session.get(CommunityUserBan, (community_id, user_id))
        return ban is not None

    def moderator_ids(self, community_id: int) -> list[int]:
        """Return the ids of the community's current moderators."""
        result = self.session.execute(
            select(CommunityModerator.user_id).where(
                CommunityModerator.community_id == community_id
            )
        )
        return list(result.scalars())

    def moderators(self, community_id: int) -> list[CommunityModeratorView]:
        """Return the moderator roster in appointment order."""
        rows = self.session.execute(
            select(
                CommunityModerator.community_id,
                CommunityModerator.user_id,
                User.name.label("user_name"),
                Community.name.label("community_name"),
                CommunityModerator.published,
            )
            .join(User, User.id == CommunityModerator.user_id)
            .join(Community, Community.id == CommunityModerator.community_id)
            .where(CommunityModerator.community_id == community_id)
            .order_by(CommunityModerator.published, CommunityModerator.user_id)
        )
        return [CommunityModeratorView.model_validate(dict(row._mapping)) for row in rows]

    def read_view(self, community_id: int, viewer_id: int | None = None) -> CommunityView | None:
        """Return the community with subscriber/post counts and the viewer's subscription."""
        subscribers = (
            select(func.count())
            .select_from(CommunityFollower)
            .where(CommunityFollower.community_id == community_id)
            .scalar_subquery()
        )
        posts = (
            select(func.count())
            .select_from(Post)
            .where(Post.community_id == community_id)
            .scalar_subquery()
        )
        row = self.session.execute(
            select(
                Community,
                User.name.label("creator_name"),
                subscribers.label("number_of_subscribers"),
                posts.label("number_of_posts"),
            )
            .join(User, User.id == Community.creator_id)
            .where(Community.id == community_id)
        ).first()
        if row is None:
            return None

        subscribed = False
        if viewer_id is not None:
            subscribed = (
                self.session.execute(
                    select(CommunityFollower.user_id).where(
                        and_(
                            CommunityFollower.community_id == community_id,
                            CommunityFollower.user_id == viewer_id,
                        )
                    )
                ).first()
                is not None
            )

        community: Community = row.Community
        return CommunityView(
            id=community.id,
            name=community.name,
            title=community.title,
            description=community.description,
            creator_id=community.creator_id,
            creator_name=row.creator_name,
            removed=community.removed,
            deleted=community.deleted,
            nsfw=community.nsfw,
            published=community.published,
            number_of_subscribers=row.number_of_subscribers,
            number_of_posts=row.number_of_posts,
            user_id=viewer_id,
            subscribed=subscribed,
        )
