"""Append-only moderation log for post actions."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_stage.models.moderation import ModLockPost, ModRemovePost

__all__ = ["ModerationLog"]


class ModerationLog:
    """Records moderator removals and locks; entries are never updated."""

    def __init__(self, session: Session) -> None:
        """Initialize the log with a SQLAlchemy session."""
        self.session = session

    def record_removal(
        self,
        mod_user_id: int,
        post_id: int,
        removed: bool,
        reason: str | None = None,
        *,
        commit: bool = True,
    ) -> ModRemovePost:
        """Append a removal (or restoration) entry; ``commit=False`` only flushes."""
        entry = ModRemovePost(
            mod_user_id=mod_user_id,
            post_id=post_id,
            removed=removed,
            reason=reason,
        )
        self.session.add(entry)
        self._finish(commit)
        return entry

    def record_lock(
        self, mod_user_id: int, post_id: int, locked: bool, *, commit: bool = True
    ) -> ModLockPost:
        """Append a lock (or unlock) entry; ``commit=False`` only flushes."""
        entry = ModLockPost(mod_user_id=mod_user_id, post_id=post_id, locked=locked)
        self.session.add(entry)
        self._finish(commit)
        return entry

    def removals_for_post(self, post_id: int) -> list[ModRemovePost]:
        """Return removal entries for a post, oldest first."""
        result = self.session.execute(
            select(ModRemovePost)
            .where(ModRemovePost.post_id == post_id)
            .order_by(ModRemovePost.id)
        )
        return list(result.scalars())

    def locks_for_post(self, post_id: int) -> list[ModLockPost]:
        """Return lock entries for a post, oldest first."""
        result = self.session.execute(
            select(ModLockPost)
            .where(ModLockPost.post_id == post_id)
            .order_by(ModLockPost.id)
        )
        return list(result.scalars())

    def _finish(self, commit: bool) -> None:
        if commit:
            self.session.commit()
        else:
            self.session.flush()
