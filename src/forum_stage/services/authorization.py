"""Ban checks and edit authority for post operations."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.models import Post
from forum_stage.repositories.community_repo import CommunityRepository
from forum_stage.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Resolves restrictions and authority against live roster data.

    Nothing is cached: moderator and admin rosters may change between requests.
    """

    def __init__(self, session: Session) -> None:
        self.communities = CommunityRepository(session)
        self.users = UserRepository(session)

    def check_bans(self, op: str, user_id: int, community_id: int) -> None:
        """Reject users banned from the community or from the whole site.

        The community ban is checked first, so it is reported when both apply.

        Raises:
            PostApiError: ``CommunityBanned``, ``SiteBanned``, or
                ``NotAuthenticated`` when the token's user no longer exists.
        """
        if self.communities.is_user_banned(user_id, community_id):
            logger.info("User %s is banned from community %s (%s)", user_id, community_id, op)
            raise PostApiError(op, ErrorCode.COMMUNITY_BANNED)

        user = self.users.get_by_id(user_id)
        if user is None:
            raise PostApiError(op, ErrorCode.NOT_AUTHENTICATED)
        if user.banned:
            logger.info("User %s is banned from the site (%s)", user_id, op)
            raise PostApiError(op, ErrorCode.SITE_BANNED)

    def authorized_editors(self, post: Post, community_id: int | None = None) -> set[int]:
        """Return the creator, the community's moderators and the site admins.

        ``community_id`` overrides the post's own community, for moves.
        """
        if community_id is None:
            community_id = post.community_id
        editors = {post.creator_id}
        editors.update(self.communities.moderator_ids(community_id))
        editors.update(self.users.admin_ids())
        return editors

    def ensure_can_edit(
        self, op: str, user_id: int, post: Post, community_id: int | None = None
    ) -> None:
        """Raise ``EditNotAllowed`` unless ``user_id`` may edit ``post`` in ``community_id``."""
        if user_id not in self.authorized_editors(post, community_id):
            logger.info("User %s may not edit post %s", user_id, post.id)
            raise PostApiError(op, ErrorCode.EDIT_NOT_ALLOWED)
