"""Save ledger: bookmark relation between users and posts."""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_stage.models.post import PostSaved

__all__ = ["SaveLedger"]


class SaveLedger:
    """Idempotent set/unset of the saved flag for a (post, user) pair."""

    def __init__(self, session: Session) -> None:
        """Initialize the ledger with a SQLAlchemy session."""
        self.session = session

    def is_saved(self, post_id: int, user_id: int) -> bool:
        """Return True if the user has saved the post."""
        return self.session.get(PostSaved, (post_id, user_id)) is not None

    def set(self, post_id: int, user_id: int, saved: bool) -> None:
        """Ensure the save relation exists when ``saved`` is true, and is absent otherwise."""
        existing = self.session.get(PostSaved, (post_id, user_id))
        if saved and existing is None:
            self.session.add(PostSaved(post_id=post_id, user_id=user_id))
        elif not saved and existing is not None:
            self.session.delete(existing)

        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # A concurrent save of the same pair won the insert; that is the desired state.
            if not (saved and self.is_saved(post_id, user_id)):
                raise
