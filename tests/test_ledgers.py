# tests/test_ledgers.py
"""Tests for the vote and save ledgers and the moderation log."""

from unittest.mock import patch

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from forum_stage.models import Post, PostLike
from forum_stage.repositories.modlog_repo import ModerationLog
from forum_stage.repositories.save_repo import SaveLedger
from forum_stage.repositories.vote_repo import VoteLedger


def test_vote_ledger_replace_cycle(db_session, test_post, other_user) -> None:
    """Test insert, replace and clear on the same (post, user) pair."""
    ledger = VoteLedger(db_session)

    assert ledger.replace(test_post.id, other_user.id, 1).score == 1
    assert ledger.replace(test_post.id, other_user.id, -1).score == -1
    assert ledger.get(test_post.id, other_user.id).score == -1
    assert ledger.replace(test_post.id, other_user.id, 0) is None
    assert ledger.get(test_post.id, other_user.id) is None


def test_vote_ledger_clear_without_vote(db_session, test_post, other_user) -> None:
    """Test that clearing a vote that never existed is a no-op."""
    assert VoteLedger(db_session).replace(test_post.id, other_user.id, 0) is None
    count = db_session.execute(select(func.count()).select_from(PostLike)).scalar_one()
    assert count == 0


def test_save_ledger_idempotent(db_session, test_post, other_user) -> None:
    """Test that set is idempotent in both directions."""
    ledger = SaveLedger(db_session)

    ledger.set(test_post.id, other_user.id, True)
    ledger.set(test_post.id, other_user.id, True)
    assert ledger.is_saved(test_post.id, other_user.id) is True

    ledger.set(test_post.id, other_user.id, False)
    ledger.set(test_post.id, other_user.id, False)
    assert ledger.is_saved(test_post.id, other_user.id) is False


def test_moderation_log_appends(db_session, test_post, moderator) -> None:
    """Test that each action adds a new entry rather than updating the last one."""
    log = ModerationLog(db_session)
    log.record_removal(moderator.id, test_post.id, True, "spam")
    log.record_removal(moderator.id, test_post.id, False)
    log.record_lock(moderator.id, test_post.id, True)

    removals = log.removals_for_post(test_post.id)
    assert [(entry.removed, entry.reason) for entry in removals] == [(True, "spam"), (False, None)]
    assert [entry.locked for entry in log.locks_for_post(test_post.id)] == [True]
    assert all(entry.when_ is not None for entry in removals)


def test_failed_self_vote_keeps_post(client, db_session, creator, community, token_for) -> None:
    """Test that a storage failure on the author's upvote leaves the post in place."""
    with patch.object(VoteLedger, "replace", side_effect=SQLAlchemyError("boom")):
        response = client.post(
            "/api/v1/post",
            json={"name": "Unlucky", "community_id": community.id, "auth": token_for(creator)},
        )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"op": "CreatePost", "error": "couldnt_like_post"}
    names = db_session.execute(select(Post.name)).scalars().all()
    assert names == ["Unlucky"]


def test_moderation_log_flush_only_is_undone_by_rollback(db_session, test_post, moderator) -> None:
    """Test that uncommitted log entries are visible in the session but not kept on rollback."""
    log = ModerationLog(db_session)
    log.record_removal(moderator.id, test_post.id, True, "spam", commit=False)
    log.record_lock(moderator.id, test_post.id, True, commit=False)
    assert len(log.removals_for_post(test_post.id)) == 1
    assert len(log.locks_for_post(test_post.id)) == 1

    db_session.rollback()
    assert log.removals_for_post(test_post.id) == []
    assert log.locks_for_post(test_post.id) == []
