"""Read access to user accounts, site admins and the site record."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_stage.models import Site, User
from forum_stage.schemas.user import UserView

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user collaborator data."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def admins(self) -> list[UserView]:
        """Return all current site admins, oldest account first."""
        result = self.session.execute(
            select(User).where(User.admin.is_(True)).order_by(User.published, User.id)
        )
        return [UserView.model_validate(user) for user in result.scalars()]

    def admin_ids(self) -> list[int]:
        """Return the ids of all current site admins."""
        result = self.session.execute(select(User.id).where(User.admin.is_(True)))
        return list(result.scalars())

    def site_creator_id(self, site_id: int) -> int | None:
        """Return the creator of the site record, or None if the site is not set up."""
        site = self.session.get(Site, site_id)
        return site.creator_id if site is not None else None
