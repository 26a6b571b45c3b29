"""Vote ledger: one signed vote per (post, user)."""
from __future__ import annotations

from sqlalchemy.orm import Session

from forum_stage.db.time import utcnow
from forum_stage.models.vote import PostLike

__all__ = ["VALID_SCORES", "VoteLedger"]

VALID_SCORES = frozenset({1, -1})


class VoteLedger:
    """Replace-not-duplicate storage for post votes."""

    def __init__(self, session: Session) -> None:
        """Initialize the ledger with a SQLAlchemy session."""
        self.session = session

    def get(self, post_id: int, user_id: int) -> PostLike | None:
        """Return the stored vote for the pair, if any."""
        return self.session.get(PostLike, (post_id, user_id))

    def replace(self, post_id: int, user_id: int, score: int) -> PostLike | None:
        """Set the user's vote on a post, clearing it for any score outside {-1, 1}.

        The upsert-or-delete is committed as one transaction; on failure the
        caller rolls back and the previous vote is left in place.

        Returns:
            The persisted vote, or None when the vote was cleared.
        """
        existing = self.get(post_id, user_id)

        if score not in VALID_SCORES:
            if existing is not None:
                self.session.delete(existing)
            self.session.commit()
            return None

        if existing is None:
            existing = PostLike(post_id=post_id, user_id=user_id, score=score)
            self.session.add(existing)
        else:
            existing.score = score
            existing.published = utcnow()
        self.session.commit()
        return existing
